import logging
from typing import Any, List, Optional

from errors import FigmaResourceError, InvalidAddressError, UnsupportedCategoryError
from models import ResourceCategory, ResourceContents, ResourceEntry, format_uri
from Services.figma_service import FigmaClient
from Services.ir_normalizer import normalize_document, normalize_node
from Services.json_text import dumps_indented
from Services.uri_resolver import resolve

JSON_MIME_TYPE = "application/json"

# category -> collection path under /files/{file_key}/
COLLECTION_PATHS = {
    ResourceCategory.IMAGES.value: "images",
    ResourceCategory.COMMENTS.value: "comments",
    ResourceCategory.VERSIONS.value: "versions",
    ResourceCategory.COMPONENTS.value: "components",
    ResourceCategory.STYLES.value: "styles",
    ResourceCategory.VARIABLES.value: "variables/local",
}

# Categories advertised by list(); nodes needs explicit ids so it is not listed.
LISTED_CATEGORIES = list(COLLECTION_PATHS)


def _file_entry(file: dict) -> ResourceEntry:
    return ResourceEntry(
        uri=format_uri(file["key"]),
        type="file",
        name=file.get("name") or file["key"],
        metadata={
            "lastModified": file.get("lastModified"),
            "thumbnailUrl": file.get("thumbnailUrl"),
        },
    )


def _contents(uri: str, payload: Any) -> List[ResourceContents]:
    return [ResourceContents(uri=uri, mime_type=JSON_MIME_TYPE, text=dumps_indented(payload))]


class FigmaResourceHandler:
    def __init__(self, client: FigmaClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.log = logger or logging.getLogger(__name__)

    # ===============================
    # READ
    # ===============================

    def read(self, uri: str) -> List[ResourceContents]:
        try:
            address = resolve(uri)
            payload = self._fetch(address)
        except FigmaResourceError as e:
            self.log.error("[READ] %s failed: %s", uri, e)
            raise

        return _contents(uri, payload)

    def _fetch(self, address) -> Any:
        file_key = address.container_key
        category = address.category

        if category is None:
            self.log.info("[READ] Whole file %s", file_key)
            return normalize_document(self.client.get_file(file_key))

        if category == ResourceCategory.NODES.value:
            node_ids = [n for n in (address.sub_id or "").split(",") if n]
            if not node_ids:
                raise InvalidAddressError(address.uri, "nodes requires one or more node ids")

            self.log.info("[READ] Nodes %s in %s", node_ids, file_key)
            data = self.client.get_file_nodes(file_key, ",".join(node_ids))
            return {
                "nodes": {
                    node_id: self._normalize_node_entry(entry)
                    for node_id, entry in (data.get("nodes") or {}).items()
                }
            }

        collection = COLLECTION_PATHS.get(category)
        if collection is None:
            raise UnsupportedCategoryError(category)

        self.log.info("[READ] %s of %s", category, file_key)
        return self.client.get_file_collection(file_key, collection)

    @staticmethod
    def _normalize_node_entry(entry: Any) -> Any:
        # Unknown ids come back as null
        if not isinstance(entry, dict):
            return entry
        if isinstance(entry.get("document"), dict):
            return normalize_node(entry["document"])
        return normalize_node(entry)

    # ===============================
    # LIST / SEARCH
    # ===============================

    def list(self) -> List[ResourceEntry]:
        try:
            files = self.client.list_my_files().get("files") or []
        except FigmaResourceError as e:
            self.log.error("[LIST] failed: %s", e)
            raise
        self.log.info("[LIST] %d accessible files", len(files))

        resources = []
        for file in files:
            resources.append(_file_entry(file))
            for category in LISTED_CATEGORIES:
                resources.append(
                    ResourceEntry(
                        uri=format_uri(file["key"], category),
                        type=category,
                        name=f"{file.get('name')} - {category}",
                        metadata={"fileKey": file["key"], "fileName": file.get("name")},
                    )
                )
        return resources

    def search(self, query: str) -> List[ResourceEntry]:
        self.log.info("[SEARCH] %r", query)
        try:
            results = self.client.search_files(query)
        except FigmaResourceError as e:
            self.log.error("[SEARCH] %r failed: %s", query, e)
            raise
        return [_file_entry(file) for file in results.get("files") or []]

    # ===============================
    # WATCH
    # ===============================

    def watch(self, uri: str) -> None:
        """Confirm a whole-file resource is reachable. No subscription is kept."""
        self.log.info("[WATCH] %s", uri)
        try:
            address = resolve(uri)
            if address.is_whole_document:
                self.client.get_file(address.container_key)
        except FigmaResourceError as e:
            self.log.error("[WATCH] %s failed: %s", uri, e)
            raise
