import os
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables
load_dotenv()

BASE_PACKAGE_DIR = Path(__file__).resolve().parent.parent.parent

# Model provider configuration
ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
ANTHROPIC_API_BASE = os.getenv('ANTHROPIC_API_BASE', 'https://api.anthropic.com/v1')
ANTHROPIC_VERSION = os.getenv('ANTHROPIC_VERSION', '2023-06-01')
MODEL_NAME = os.getenv('MODEL_NAME', 'claude-sonnet-4-6')
MAX_TOKENS = int(os.getenv('MAX_TOKENS', '1024'))
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '30'))

# Inventory configuration
_env_inventory_path = os.getenv('INVENTORY_PATH')
if _env_inventory_path:
    _p = Path(_env_inventory_path)
    # If a relative path was provided, resolve relative to the repo CWD
    if not _p.is_absolute():
        _p = (Path.cwd() / _p).resolve()
    INVENTORY_PATH = str(_p)
else:
    INVENTORY_PATH = str((BASE_PACKAGE_DIR / "data" / "inventory.csv").resolve())

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

# API configuration
API_TITLE = "Churro Rental Search API"
API_DESCRIPTION = "Conversational car rental search: free text in, filtered cars, comparisons and booking handoffs out"
API_VERSION = "1.0.0"
