#!/usr/bin/env python3
"""
sharepoint_client.py - ResourceClient backed by Office365-REST-Python-Client

Every remote call is a blocking execute_query(); there is no retry layer.
ClientRequestException is wrapped as ResourceClientError so callers only
deal with LinkFix errors.

The library setting must be the server-relative URL of the document
library root, e.g. "/sites/Team/Shared Documents".
"""

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Set

from linkfix.config_utils import LinkFixConfig, require_valid
from linkfix.errors import ResourceClientError
from linkfix.resource_client import RecordHandle, join_path, parent_path, leaf_name
from linkfix.security_utils import mask_sensitive

# Lazy import - only load office365 when actually connecting
if TYPE_CHECKING:
    from office365.sharepoint.client_context import ClientContext


LINK_CONTENT_TYPE = "Link to a Document"

EXPORT_SELECT = [
    "ID", "Title", "FileLeafRef", "FileRef", "URL", "Created", "Modified",
    "ContentType/Name", "Author/Title", "Editor/Title",
]


def _status_code(error: Exception) -> Optional[int]:
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None)


class SharePointClient:
    """Resource client for one SharePoint site."""

    def __init__(
        self,
        site_url: str,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ):
        self.site_url = site_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.username = username
        self.password = password
        self._ctx: Optional["ClientContext"] = None

    @classmethod
    def from_config(cls, config: LinkFixConfig) -> "SharePointClient":
        require_valid(config)
        return cls(
            site_url=config.site_url,
            client_id=config.client_id,
            client_secret=config.client_secret,
            username=config.username,
            password=config.password,
        )

    def __repr__(self) -> str:
        who = self.client_id or self.username
        return f"SharePointClient({self.site_url!r}, {mask_sensitive(who)})"

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Authenticate and load the web once to prove the session works."""
        from office365.sharepoint.client_context import ClientContext  # Lazy import
        from office365.runtime.auth.client_credential import ClientCredential
        from office365.runtime.auth.user_credential import UserCredential

        if self.client_id and self.client_secret:
            credentials = ClientCredential(self.client_id, self.client_secret)
        elif self.username and self.password:
            credentials = UserCredential(self.username, self.password)
        else:
            raise ResourceClientError(
                message="No SharePoint credentials supplied",
                suggestion="Set client_id/client_secret or username/password",
                context={"site_url": self.site_url},
            )

        ctx = ClientContext(self.site_url).with_credentials(credentials)
        self._run(lambda: ctx.web.get().execute_query(), "connect", self.site_url)
        self._ctx = ctx

    @property
    def ctx(self) -> "ClientContext":
        if self._ctx is None:
            raise ResourceClientError(
                message="SharePoint client is not connected",
                suggestion="Call connect() before using the client",
            )
        return self._ctx

    def _run(self, call, action: str, path: str):
        from office365.runtime.client_request_exception import ClientRequestException

        try:
            return call()
        except ClientRequestException as e:
            raise ResourceClientError(
                message=f"SharePoint {action} failed",
                context={"path": path, "status": _status_code(e)},
                cause=e,
            )

    # ------------------------------------------------------------------
    # Existence
    # ------------------------------------------------------------------

    def resource_exists(self, path: str) -> bool:
        from office365.runtime.client_request_exception import ClientRequestException

        try:
            self.ctx.web.get_file_by_server_relative_path(path).get().execute_query()
            return True
        except ClientRequestException as e:
            if _status_code(e) == 404:
                return self._folder_exists(path)
            raise ResourceClientError(
                message="SharePoint existence check failed",
                context={"path": path, "status": _status_code(e)},
                cause=e,
            )

    def _folder_exists(self, path: str) -> bool:
        from office365.runtime.client_request_exception import ClientRequestException

        try:
            folder = self.ctx.web.get_folder_by_server_relative_path(path).get().execute_query()
        except ClientRequestException as e:
            if _status_code(e) == 404:
                return False
            raise ResourceClientError(
                message="SharePoint folder check failed",
                context={"path": path, "status": _status_code(e)},
                cause=e,
            )
        return bool(folder.properties.get("Exists", True))

    def folder_contains(self, folder: str, name: str) -> bool:
        if not self._folder_exists(folder):
            return False
        files = self._run(
            lambda: self.ctx.web.get_folder_by_server_relative_path(folder).files.get().execute_query(),
            "list folder",
            folder,
        )
        wanted = name.casefold()
        return any(f.name.casefold() == wanted for f in files)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def duplicate_resource(self, source: str, target: str, overwrite: bool = False) -> None:
        from office365.runtime.queries.service_operation import ServiceOperationQuery

        if not overwrite and self.resource_exists(target):
            raise ResourceClientError(
                message=f"Target already exists: {leaf_name(target)}",
                context={"source": source, "target": target},
            )

        def _copy():
            source_file = self.ctx.web.get_file_by_server_relative_path(source)
            params = {"strNewUrl": target, "bOverWrite": overwrite}
            self.ctx.add_query(ServiceOperationQuery(source_file, "CopyTo", params))
            self.ctx.execute_query()

        self._run(_copy, "copy", f"{source} -> {target}")

    def delete_resource(self, path: str, recycle: bool = True) -> None:
        def _delete():
            target = self.ctx.web.get_file_by_server_relative_path(path)
            if recycle:
                target.recycle().execute_query()
            else:
                target.delete_object().execute_query()

        self._run(_delete, "delete", path)

    def create_folder(self, parent: str, name: str) -> None:
        path = join_path(parent, name)
        if self._folder_exists(path):
            return
        self._run(
            lambda: self.ctx.web.get_folder_by_server_relative_path(parent).folders.add(name).execute_query(),
            "create folder",
            path,
        )

    def get_resource_as_record(self, path: str) -> RecordHandle:
        item = self._run(
            lambda: self.ctx.web.get_file_by_server_relative_path(path).listItemAllFields.get().execute_query(),
            "load list item",
            path,
        )
        return RecordHandle(path, item)

    def set_record_fields(self, handle: RecordHandle, fields: Mapping[str, str]) -> None:
        # Form values take URL fields as "<url>, <description>" strings
        form_values = {name: str(value) for name, value in fields.items()}
        result = self._run(
            lambda: handle.item.validate_update_list_item(form_values).execute_query(),
            "update fields",
            handle.path,
        )
        failed = [
            f"{v.FieldName}: {v.ErrorMessage}"
            for v in getattr(result, "value", None) or []
            if getattr(v, "HasException", False)
        ]
        if failed:
            raise ResourceClientError(
                message="SharePoint rejected field values",
                context={"path": handle.path, "fields": failed},
            )

    def set_hidden(self, path: str) -> None:
        # Document libraries have no per-file hidden flag
        raise ResourceClientError(
            message="Hiding individual files is not supported by SharePoint libraries",
            suggestion="Exclude the hidden folder from library views instead",
            context={"path": path, "folder": parent_path(path)},
        )

    # ------------------------------------------------------------------
    # Schema and inventory
    # ------------------------------------------------------------------

    def get_field_names(self, container: str) -> Set[str]:
        fields = self._run(
            lambda: self.ctx.web.get_list(container).fields.get().execute_query(),
            "load fields",
            container,
        )
        return {f.internal_name for f in fields}

    def list_link_items(self, container: str) -> List[Dict[str, Any]]:
        items = self._run(
            lambda: self.ctx.web.get_list(container).items
                .select(EXPORT_SELECT)
                .expand(["ContentType", "Author", "Editor"])
                .get_all()
                .execute_query(),
            "list items",
            container,
        )

        rows: List[Dict[str, Any]] = []
        for item in items:
            props = item.properties
            if (props.get("ContentType") or {}).get("Name") != LINK_CONTENT_TYPE:
                continue
            url_field = props.get("URL") or {}
            rows.append({
                "id": props.get("ID"),
                "title": props.get("Title") or "",
                "name": props.get("FileLeafRef") or "",
                "url": url_field.get("Url", ""),
                "url_description": url_field.get("Description", ""),
                "content_type": LINK_CONTENT_TYPE,
                "created": props.get("Created") or "",
                "created_by": (props.get("Author") or {}).get("Title", ""),
                "modified": props.get("Modified") or "",
                "modified_by": (props.get("Editor") or {}).get("Title", ""),
                "path": props.get("FileRef") or "",
            })
        return rows


def make_sharepoint_client(config: LinkFixConfig) -> SharePointClient:
    """
    Create and connect a SharePoint client from configuration.

    Raises:
        ConfigurationError: if site or credentials are missing
        ResourceClientError: if the site cannot be reached
    """
    client = SharePointClient.from_config(config)
    client.connect()
    return client
