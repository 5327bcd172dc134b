import logging

from config import SETTINGS

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = None) -> None:
    """Configure le logger racine une seule fois (Streamlit réexécute app.py)."""
    root = logging.getLogger()
    if getattr(root, "_licitax_configured", False):
        return
    logging.basicConfig(level=(level or SETTINGS.LOG_LEVEL).upper(), format=LOG_FORMAT)
    # urllib3 est bavard en DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    root._licitax_configured = True
