"""
FastAPI Form Module

HTTP front end for the transaction form: amount and description come in as
text, get validated, and are applied to the account. Runs on port 8090.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, HTTPException, Depends, status
from pydantic import BaseModel, Field
import uvicorn

from .amounts import format_amount
from .forms import FormResult
from .system import FinanceSystem
from .transactions import TransactionKind


# Pydantic models for API requests/responses
class TransactionFormRequest(BaseModel):
    amount: str = Field(..., description="Amount as typed, e.g. \"1,250.50\"")
    description: str = Field("", description="Free text label")


class TransactionFormResponse(BaseModel):
    kind: str
    message: str
    balance: str


# Finance system shared by all requests
finance_system: Optional[FinanceSystem] = None


def get_finance_system() -> FinanceSystem:
    global finance_system
    if finance_system is None:
        finance_system = FinanceSystem()
    return finance_system


def set_finance_system(system: FinanceSystem) -> None:
    """Serve an existing system (e.g. the one the demo ran against)"""
    global finance_system
    finance_system = system


app = FastAPI(
    title="Finance Manager",
    description="Income and expense form for the finance core",
    version="1.0.0"
)


def _to_response(result: FormResult) -> TransactionFormResponse:
    if not result.ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.message)
    return TransactionFormResponse(
        kind=result.kind.value,
        message=result.message,
        balance=format_amount(result.balance)
    )


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/account")
async def get_account(system: FinanceSystem = Depends(get_finance_system)):
    """Current balance and account count"""
    account = system.account
    return {
        "owner": account.owner_label,
        "balance": format_amount(account.current_balance()),
        "total_accounts": system.registry.account_count()
    }


@app.post("/transactions/income", response_model=TransactionFormResponse)
def add_income(
    request: TransactionFormRequest,
    system: FinanceSystem = Depends(get_finance_system)
):
    """Add income"""
    result = system.form_handler.submit(TransactionKind.INCOME, request.amount, request.description)
    return _to_response(result)


@app.post("/transactions/expense", response_model=TransactionFormResponse)
def add_expense(
    request: TransactionFormRequest,
    system: FinanceSystem = Depends(get_finance_system)
):
    """Add expense"""
    result = system.form_handler.submit(TransactionKind.EXPENSE, request.amount, request.description)
    return _to_response(result)


def run_server(host: str = "127.0.0.1", port: int = 8090):
    """Run the FastAPI server"""
    uvicorn.run(app, host=host, port=port, log_level="info")
