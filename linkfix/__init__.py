"""
LinkFix - Repair SharePoint Online "Link to a Document" items

Link items created by scripts are marked non-executable by SharePoint and
download instead of opening. LinkFix exports them, deletes them, and
recreates each one as a server-side copy of a UI-created template item.
"""

__version__ = "1.0.0"
__author__ = "Dale Chapman"
__license__ = "MIT"

# Make key utilities easily importable
from .config_utils import get_config
from .errors import LinkFixError, ConfigurationError

__all__ = [
    "__version__",
    "get_config",
    "LinkFixError",
    "ConfigurationError",
]
