"""
taskboard
---------
Run:
  pip install -e .
  uvicorn app:app --reload
Open http://127.0.0.1:8000/
"""
from taskboard.config import Settings
from taskboard.logging_setup import setup_logging
from taskboard.main import create_app

settings = Settings.from_env()
setup_logging(settings.log_level)

app = create_app(settings)
