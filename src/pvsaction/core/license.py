"""License file resolution."""

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pvsaction.platforms.base import PlatformBackend


logger = logging.getLogger(__name__)


async def resolve_license(
    explicit_path: Optional[str],
    backend: "PlatformBackend",
) -> Optional[str]:
    """Find the license file to pass to the analyzer.

    An explicit ``licence-file`` input is used verbatim. Otherwise the
    license is exported from the PVS_STUDIO_LICENSE_NAME and
    PVS_STUDIO_LICENSE_KEY environment variables.

    Returns:
        Path to the license file, or None when no license is available
    """
    explicit_path = (explicit_path or "").strip()
    if explicit_path:
        logger.debug("Using license file from input: %s", explicit_path)
        return explicit_path

    license_path = await backend.export_license_from_environment()
    if license_path is None:
        logger.debug("No license credentials in the environment")
        return None
    return str(license_path)
