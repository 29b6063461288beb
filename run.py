#!/usr/bin/env python3
"""
Finance Core Entry Point

Runs the ledger demo, leaves the auto-save tasks and the finance server
running in the background, then serves the transaction form on port 8090.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from finance_core.config import get_config
from finance_core.logging_config import setup_logging
from finance_core.system import FinanceSystem
from finance_core.api import run_server, set_finance_system


if __name__ == "__main__":
    config = get_config()
    logger = setup_logging(config.log_level, "finance", config.log_format, config.log_file)

    try:
        system = FinanceSystem(config)
        system.run_demo()

        if config.form_enabled:
            set_finance_system(system)
            logger.info(f"Transaction form available at: http://{config.api_host}:{config.api_port}/docs")
            run_server(host=config.api_host, port=config.api_port)
    except KeyboardInterrupt:
        logger.info("Shutting down Finance Core...")
    except Exception:
        logger.exception("Error starting Finance Core")
        sys.exit(1)
