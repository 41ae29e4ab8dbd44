import logging
import socket
import time

from . import settings

logger = logging.getLogger(__name__)

PROBE_HOST = ("1.1.1.1", 53) # Public DNS, answers TCP on port 53


class ConnectivityProbe:
    """Checks that the internet is reachable before any service gets called."""

    def __init__(self, host=PROBE_HOST, sleep=time.sleep):
        self.host = host
        self.sleep = sleep

    def check(self, retryCount=settings.PROBE_RETRIES, retryInterval=settings.PROBE_INTERVAL, timeout=settings.PROBE_TIMEOUT) -> bool:
        for attempt in range(1, retryCount + 1):
            try:
                with socket.create_connection(self.host, timeout=timeout):
                    return True
            except OSError as e: # socket.timeout is an OSError too
                logger.debug("Connectivity attempt %d/%d failed: %s", attempt, retryCount, e)
            if attempt < retryCount:
                self.sleep(retryInterval)
        return False
