# errors.py
"""
Custom exception classes with improved error messages for LinkFix

All exceptions include:
- Clear error description
- Actionable suggestions
- Relevant context
"""
from pathlib import Path
from typing import Optional, Dict, Any, Iterable


class LinkFixError(Exception):
    """Base exception for all LinkFix errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"❌ {self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("💡 Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(LinkFixError):
    """Configuration is missing or invalid"""
    pass


class TemplateNotFoundError(LinkFixError):
    """The template link item exists in neither candidate location"""
    pass


class RecordImportError(LinkFixError):
    """Input record set is missing, empty or malformed"""
    pass


class SchemaError(LinkFixError):
    """Target library lacks a field the rewrite needs"""
    pass


class ResourceClientError(LinkFixError):
    """Error communicating with SharePoint"""
    pass


class NameResolutionError(LinkFixError):
    """No free leaf name found within the attempt limit"""
    pass


# Specific error factory functions

def template_not_found_error(
    template_name: str,
    searched_paths: Iterable[str]
) -> TemplateNotFoundError:
    """Create error when the template item cannot be found"""
    searched = list(searched_paths)
    return TemplateNotFoundError(
        message=f"Template link item not found: {template_name}",
        suggestion=(
            "Create one 'Link to a Document' item through the SharePoint UI\n"
            f"  named {template_name} in the library root, then run again.\n\n"
            "Items created by scripts are not executable and cannot serve\n"
            "  as a template."
        ),
        context={
            "template_name": template_name,
            "searched_locations": searched,
        }
    )


def missing_input_error(
    source: Path,
    reason: str,
    cause: Optional[Exception] = None
) -> RecordImportError:
    """Create error for a missing or unusable input CSV"""
    return RecordImportError(
        message=f"Cannot import link records: {reason}",
        suggestion=(
            "Provide a CSV file with a header row containing:\n"
            "  Title,URL,Description\n\n"
            "Title and URL are required on every row; Description is optional.\n"
            "Run: linkfix export to produce one from the current library"
        ),
        context={
            "source": str(source),
        },
        cause=cause
    )


def missing_fields_error(
    library: str,
    missing_fields: list[str]
) -> SchemaError:
    """Create error when the library schema lacks required fields"""
    return SchemaError(
        message=f"Library {library} is missing required fields",
        suggestion=(
            "Enable the 'Link to a Document' content type on the library:\n"
            "  Library settings → Advanced settings → Allow management of content types\n"
            "  then add 'Link to a Document' under Content Types"
        ),
        context={
            "library": library,
            "missing_fields": missing_fields,
        }
    )


def missing_site_error(expected_path: Path) -> ConfigurationError:
    """Create error for missing SharePoint connection settings"""
    return ConfigurationError(
        message="SharePoint site or credentials not configured",
        suggestion=(
            f"Create credentials file at: {expected_path}\n\n"
            "Contents:\n"
            '  SITE_URL = "https://contoso.sharepoint.com/sites/Team"\n'
            '  CLIENT_ID = "your_app_id"\n'
            '  CLIENT_SECRET = "your_app_secret"\n\n'
            "Or set SHAREPOINT_SITE_URL, SHAREPOINT_CLIENT_ID and\n"
            "  SHAREPOINT_CLIENT_SECRET environment variables"
        ),
        context={
            "expected_path": str(expected_path),
            "env_var": "SHAREPOINT_CREDENTIAL_FILE"
        }
    )
