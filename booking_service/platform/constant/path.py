import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[3]

# The test suite redirects log files via TEST_LOG_DIR
LOG_DIR = Path(os.environ.get('TEST_LOG_DIR') or PROJECT_ROOT / 'logs')
