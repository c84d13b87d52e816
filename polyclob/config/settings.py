"""Configuration and settings management"""

import os
from dotenv import load_dotenv

load_dotenv()

# Network
CLOB_HOST = os.getenv("CLOB_HOST", "https://clob.polymarket.com").rstrip("/")
CHAIN_ID = int(os.getenv("CHAIN_ID", "137"))
SIGNATURE_TYPE = int(os.getenv("SIGNATURE_TYPE", "0"))  # 0=EOA, 1=proxy, 2=safe
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))
USE_SERVER_TIME = os.getenv("USE_SERVER_TIME", "NO").upper() == "YES"

# Credentials
PRIVATE_KEY = os.getenv("PRIVATE_KEY", "")
FUNDER_ADDRESS = os.getenv("FUNDER_ADDRESS", "")

# L2 API credentials (optional, can be derived from the private key)
API_KEY = os.getenv("API_KEY", "")
API_SECRET = os.getenv("API_SECRET", "")
API_PASSPHRASE = os.getenv("API_PASSPHRASE", "")

# Builder (order-flow attribution) credentials
BUILDER_API_KEY = os.getenv("BUILDER_API_KEY", "")
BUILDER_SECRET = os.getenv("BUILDER_SECRET", "")
BUILDER_PASSPHRASE = os.getenv("BUILDER_PASSPHRASE", "")

# Logging
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
LOG_DIR = os.getenv("LOG_DIR", f"{BASE_DIR}/logs")
LOG_FILE = f"{LOG_DIR}/polyclob.log"
ERROR_LOG_FILE = f"{LOG_DIR}/errors.log"
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "YES").upper() == "YES"
