"""TLS trust store setup for Beeswax connections.

Nothing here runs at import time; callers build the context once at startup
and hand it to the client (BeeswaxClient(verify=...) or ca_bundle in the
connection config).
"""

import logging
import ssl
from pathlib import Path

logger = logging.getLogger(__name__)


def build_ssl_context(ca_bundle: str | Path | None = None) -> ssl.SSLContext:
    """Build an SSL context trusting the system CAs plus an optional bundle.

    Args:
        ca_bundle: PEM file with extra CA certificates (e.g. an intermediate
            missing from the system store)

    Returns:
        SSL context for BeeswaxClient(verify=...)

    Raises:
        FileNotFoundError: If the bundle does not exist
        ssl.SSLError: If the bundle is not valid PEM
    """
    context = ssl.create_default_context()
    if ca_bundle:
        ca_path = Path(ca_bundle)
        if not ca_path.is_file():
            raise FileNotFoundError(f"CA bundle not found: {ca_path}")
        context.load_verify_locations(cafile=str(ca_path))
        logger.info(f"Loaded extra CA certificates from {ca_path}")
    return context
