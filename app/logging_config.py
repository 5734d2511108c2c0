# app/logging_config.py
import logging
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

from app.core.config import get_settings

settings = get_settings()

PROJECT_ROOT = Path(__file__).parent.parent

# Rutas relativas se resuelven desde la raíz del proyecto
LOG_FILE = Path(settings.LOG_FILE)
if not LOG_FILE.is_absolute():
    LOG_FILE = PROJECT_ROOT / LOG_FILE
LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(),
        TimedRotatingFileHandler(LOG_FILE, when="midnight", interval=1, backupCount=30, encoding='utf-8'),
    ],
    force=True,    # sobreescribe config que ponga uvicorn
)
