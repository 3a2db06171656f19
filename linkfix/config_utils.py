# config_utils.py - YAML Configuration System for LinkFix
"""
LinkFix configuration utilities with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Command-line options (applied by cli.py via apply_overrides)
2. Environment variables (SHAREPOINT_SITE_URL, LINKFIX_LIBRARY, etc.)
3. linkfix.yaml (or linkfix.yml) in the working directory
4. ~/.linkfix/config.yaml (global defaults)

Credentials not set by any of the above are read from the credentials
file (SHAREPOINT_CREDENTIAL_FILE, default ~/.sharepoint/credentials.txt).

Usage:
    from linkfix.config_utils import get_config

    config = get_config()
    print(config.library)
    print(config.template_name)
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

import yaml

from linkfix.errors import ConfigurationError, missing_site_error
from linkfix.security_utils import CredentialError, parse_credentials_file


def default_credential_file() -> Path:
    return Path.home() / ".sharepoint" / "credentials.txt"


@dataclass
class LinkFixConfig:
    """Complete LinkFix configuration"""
    # SharePoint connection
    site_url: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    credential_file: Optional[Path] = None

    # Recreate settings
    library: Optional[str] = None
    template_name: str = "test.aspx"
    hidden_folder: str = "_template"
    extension: str = ".aspx"

    # Files (relative paths resolve against work_dir)
    input_csv: Path = Path("links.csv")
    export_csv: Path = Path("links_export.csv")
    log_dir: Path = Path("logs")
    work_dir: Optional[Path] = None

    # Extra settings from config file
    extra: Dict[str, Any] = field(default_factory=dict)

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)

    def resolve_path(self, value: Path) -> Path:
        value = Path(value).expanduser()
        if value.is_absolute() or self.work_dir is None:
            return value
        return self.work_dir / value

    @property
    def has_credentials(self) -> bool:
        app_only = bool(self.client_id and self.client_secret)
        user = bool(self.username and self.password)
        return app_only or user

    def validate(self) -> List[str]:
        """Return a list of configuration problems (empty when usable)"""
        issues = []
        if not self.site_url:
            issues.append("site_url is not set")
        if not self.has_credentials:
            issues.append("credentials missing: set client_id/client_secret or username/password "
                          "(directly or via credential_file)")
        if not self.library:
            issues.append("library is not set")
        if not self.template_name:
            issues.append("template_name is empty")
        if not self.hidden_folder:
            issues.append("hidden_folder is empty")
        return issues

    def is_valid(self) -> bool:
        return not self.validate()


# Keys accepted in YAML, mapped to config attributes
YAML_MAPPINGS = {
    "site_url": "site_url",
    "client_id": "client_id",
    "client_secret": "client_secret",
    "username": "username",
    "password": "password",
    "credential_file": "credential_file",
    "library": "library",
    "template_name": "template_name",
    "hidden_folder": "hidden_folder",
    "extension": "extension",
    "input_csv": "input_csv",
    "export_csv": "export_csv",
    "log_dir": "log_dir",
}

PATH_ATTRS = {"credential_file", "input_csv", "export_csv", "log_dir"}

ENV_MAPPINGS = {
    "SHAREPOINT_SITE_URL": "site_url",
    "SHAREPOINT_CLIENT_ID": "client_id",
    "SHAREPOINT_CLIENT_SECRET": "client_secret",
    "SHAREPOINT_USERNAME": "username",
    "SHAREPOINT_PASSWORD": "password",
    "SHAREPOINT_CREDENTIAL_FILE": "credential_file",
    "LINKFIX_LIBRARY": "library",
    "LINKFIX_TEMPLATE_NAME": "template_name",
    "LINKFIX_HIDDEN_FOLDER": "hidden_folder",
    "LINKFIX_INPUT_CSV": "input_csv",
    "LINKFIX_LOG_DIR": "log_dir",
}


class ConfigLoader:
    """Load configuration from multiple sources"""

    def __init__(self, work_dir: Optional[Path] = None):
        self.work_dir = Path(work_dir) if work_dir else Path.cwd()
        self.config = LinkFixConfig(work_dir=self.work_dir)

    def load(self) -> LinkFixConfig:
        """Load configuration from all sources in priority order"""
        # Load in reverse priority (lowest first, higher overwrites)
        self._load_global_config()
        self._load_yaml_config()
        self._load_env_vars()

        # Resolve credentials if needed
        self._resolve_credentials()

        return self.config

    def _load_global_config(self):
        """Load ~/.linkfix/config.yaml if it exists"""
        global_config = Path.home() / ".linkfix" / "config.yaml"
        if global_config.exists():
            self._load_yaml_file(global_config, "global")

    def _load_yaml_config(self):
        """Load linkfix.yaml (or linkfix.yml) from the working directory"""
        for name in ("linkfix.yaml", "linkfix.yml"):
            yaml_path = self.work_dir / name
            if yaml_path.exists():
                self._load_yaml_file(yaml_path, name)
                return

    def _load_yaml_file(self, path: Path, source_name: str):
        """Load settings from a YAML file"""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                message=f"Could not parse {path.name}",
                suggestion="Check the file for YAML syntax errors (indentation, quotes)",
                context={"file": str(path)},
                cause=e,
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"{path.name} must be a mapping at top level",
                context={"file": str(path)},
            )

        for yaml_key, attr in YAML_MAPPINGS.items():
            if yaml_key in data and data[yaml_key] is not None:
                self._set(attr, data[yaml_key], source_name)

        # Store any extra settings
        for key, value in data.items():
            if key not in YAML_MAPPINGS:
                self.config.extra[key] = value

    def _load_env_vars(self):
        """Load from environment variables (highest file-independent priority)"""
        for env_name, attr in ENV_MAPPINGS.items():
            value = os.environ.get(env_name)
            if value:
                self._set(attr, value, f"env:{env_name}")

    def _set(self, attr: str, value: Any, source: str):
        if attr in PATH_ATTRS:
            value = Path(str(value)).expanduser()
        else:
            value = str(value)
        setattr(self.config, attr, value)
        self.config._sources[attr] = source

    def _resolve_credentials(self):
        """Fill connection settings from the credentials file if not set directly"""
        if self.config.site_url and self.config.has_credentials:
            return  # Already have credentials

        cred_file = self.config.credential_file or default_credential_file()
        if not cred_file.exists():
            return

        try:
            found = parse_credentials_file(cred_file)
        except CredentialError as e:
            print(f"[config:warn] Failed to load credentials from {cred_file}: {e}")
            return

        for key, attr in (
            ("SITE_URL", "site_url"),
            ("CLIENT_ID", "client_id"),
            ("CLIENT_SECRET", "client_secret"),
            ("USERNAME", "username"),
            ("PASSWORD", "password"),
        ):
            if not getattr(self.config, attr) and key in found:
                setattr(self.config, attr, found[key])
                self.config._sources[attr] = f"credentials:{cred_file.name}"


# ============================================================================
# Public API
# ============================================================================

def get_config(work_dir: Optional[Path] = None) -> LinkFixConfig:
    """
    Get complete LinkFix configuration.

    Args:
        work_dir: Directory holding linkfix.yaml (defaults to cwd)

    Returns:
        LinkFixConfig with all settings resolved
    """
    loader = ConfigLoader(work_dir)
    return loader.load()


def apply_overrides(config: LinkFixConfig, **overrides: Any) -> LinkFixConfig:
    """Apply non-empty command-line overrides on top of a loaded config"""
    for attr, value in overrides.items():
        if value is None:
            continue
        if attr in PATH_ATTRS:
            value = Path(value).expanduser()
        setattr(config, attr, value)
        config._sources[attr] = "cli"
    return config


def require_valid(config: LinkFixConfig) -> LinkFixConfig:
    """
    Raise ConfigurationError unless the config can drive a run.

    Raises:
        ConfigurationError: listing every problem found
    """
    issues = config.validate()
    if not issues:
        return config

    if not config.site_url or not config.has_credentials:
        raise missing_site_error(config.credential_file or default_credential_file())

    raise ConfigurationError(
        message="LinkFix configuration is incomplete",
        suggestion=(
            "Set the missing values in linkfix.yaml, for example:\n"
            "  library: /sites/Team/Shared Documents\n"
            "  template_name: test.aspx\n\n"
            "Or run: linkfix init"
        ),
        context={"issues": issues},
    )


def create_config_template(include_comments: bool = True) -> str:
    """
    Generate a linkfix.yaml template.

    Args:
        include_comments: Whether to include explanatory comments

    Returns:
        YAML string ready to write to file
    """
    if include_comments:
        return '''# LinkFix Configuration File
# Environment variables override these values.

# SharePoint site
site_url: https://REPLACE.sharepoint.com/sites/REPLACE

# Credentials
# Option 1: Reference a credentials file (recommended)
credential_file: ~/.sharepoint/credentials.txt

# Option 2: Inline app registration (less secure)
# client_id: your_app_id
# client_secret: your_app_secret

# Library (server-relative path) that holds the link items
library: /sites/REPLACE/Shared Documents

# Link item created through the SharePoint UI, used as the copy source
template_name: test.aspx

# Folder inside the library that keeps the template out of sight
hidden_folder: _template

# Files
input_csv: links.csv          # Title,URL,Description
export_csv: links_export.csv  # written by: linkfix export
log_dir: logs
'''
    else:
        return '''site_url: https://REPLACE.sharepoint.com/sites/REPLACE
credential_file: ~/.sharepoint/credentials.txt
library: /sites/REPLACE/Shared Documents
template_name: test.aspx
hidden_folder: _template
input_csv: links.csv
export_csv: links_export.csv
log_dir: logs
'''
