"""Entry point for python -m contract_manager"""

from contract_manager.cli.main import app

if __name__ == "__main__":
    app()
