import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setupLogging(level="INFO", logFile=None):
    handlers = [logging.StreamHandler()]
    if logFile:
        handlers.append(RotatingFileHandler(logFile, maxBytes=1_000_000, backupCount=3, encoding="utf-8")) # Keeps a few MB of history at most
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT, handlers=handlers, force=True)
    logging.getLogger("urllib3").setLevel(logging.WARNING) # requests is chatty at DEBUG
