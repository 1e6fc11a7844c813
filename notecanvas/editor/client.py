"""
Client HTTP de l'API NoteCanvas utilisé par l'éditeur.

Les statuts d'erreur sont traduits en exceptions de `notecanvas.editor.errors`.
Aucun timeout n'est imposé: on garde celui du client HTTP sous-jacent.
"""

import requests
import logging
from pydantic import ValidationError as SchemaError
from typing import Any, List, Optional

from notecanvas.core.config import settings
from notecanvas.editor.errors import (
    AccessDenied, ApiError, AuthenticationError, NetworkOrServerError, NotFound, ValidationError
)
from notecanvas.schemas.block import BlockResponse
from notecanvas.schemas.folder import FolderResponse, FolderTree
from notecanvas.schemas.page import PageResponse, PageSummary, PageWithBlocks
from notecanvas.schemas.user import AuthResponse, UserResponse

logger = logging.getLogger(__name__)

STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AccessDenied,
    404: NotFound,
    422: ValidationError,
}


class ApiClient:
    """
    Enveloppe les routes de l'API.

    `http` est n'importe quel objet avec une méthode `request(method, url, **kwargs)`
    à la manière de `requests.Session` (le TestClient de FastAPI convient aussi).
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None, http: Any = None):
        self.base_url = (settings.API_URL if base_url is None else base_url).rstrip("/")
        self.token = token
        self.http = http if http is not None else requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.http.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkOrServerError(str(e)) from e

        if response.status_code >= 400:
            detail = _detail(response)
            error_class = STATUS_ERRORS.get(response.status_code, NetworkOrServerError)
            raise error_class(detail, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body")
            raise NetworkOrServerError(f"Invalid JSON response from {path}", status_code=response.status_code) from e

    # Auth

    def register(self, email: str, username: str, password: str) -> UserResponse:
        data = self._request("POST", "/auth/register", json={"email": email, "username": username, "password": password})
        auth = _parse(AuthResponse, data)
        self.token = auth.access_token
        return auth.user

    def login(self, email_or_username: str, password: str) -> UserResponse:
        data = self._request("POST", "/auth/login", json={"email_or_username": email_or_username, "password": password})
        auth = _parse(AuthResponse, data)
        self.token = auth.access_token
        return auth.user

    def me(self) -> UserResponse:
        return _parse(UserResponse, self._request("GET", "/auth/me"))

    # Pages

    def list_pages(self) -> List[PageSummary]:
        return _parse_list(PageSummary, self._request("GET", "/pages"))

    def get_page(self, page_id: int) -> PageWithBlocks:
        return _parse(PageWithBlocks, self._request("GET", f"/pages/{page_id}"))

    def create_page(self, title: str = "Untitled") -> PageResponse:
        return _parse(PageResponse, self._request("POST", "/pages", json={"title": title}))

    def update_page(self, page_id: int, title: str) -> PageResponse:
        if not title or not title.strip():
            raise ValidationError("Title is required")
        data = self._request("PUT", f"/pages/{page_id}", json={"title": title.strip()})
        return _parse(PageResponse, data)

    def delete_page(self, page_id: int) -> None:
        self._request("DELETE", f"/pages/{page_id}")

    # Blocks

    def list_blocks(self, page_id: int) -> List[BlockResponse]:
        return _parse_list(BlockResponse, self._request("GET", f"/blocks/page/{page_id}"))

    def create_block(self, page_id: int, type: str, content: dict, order_index: int = 0) -> BlockResponse:
        data = self._request("POST", "/blocks", json={
            "page_id": page_id,
            "type": type,
            "content": content,
            "order_index": order_index
        })
        return _parse(BlockResponse, data)

    def update_block(self, block_id: int, content: Optional[dict] = None,
                     order_index: Optional[int] = None, type: Optional[str] = None) -> BlockResponse:
        body = {}
        if content is not None:
            body["content"] = content
        if order_index is not None:
            body["order_index"] = order_index
        if type is not None:
            body["type"] = type
        return _parse(BlockResponse, self._request("PUT", f"/blocks/{block_id}", json=body))

    def delete_block(self, block_id: int) -> None:
        self._request("DELETE", f"/blocks/{block_id}")

    def reorder_blocks(self, page_id: int, block_orders: List[dict]) -> List[BlockResponse]:
        data = self._request("PUT", f"/blocks/reorder/{page_id}", json={"block_orders": block_orders})
        return _parse_list(BlockResponse, data)

    # Folders

    def list_folders(self) -> List[FolderTree]:
        return _parse_list(FolderTree, self._request("GET", "/folders"))

    def create_folder(self, name: str, parent_id: Optional[int] = None) -> FolderResponse:
        if not name or not name.strip():
            raise ValidationError("Folder name is required")
        data = self._request("POST", "/folders", json={"name": name.strip(), "parent_id": parent_id})
        return _parse(FolderResponse, data)

    def update_folder(self, folder_id: int, **changes) -> FolderResponse:
        return _parse(FolderResponse, self._request("PUT", f"/folders/{folder_id}", json=changes))

    def delete_folder(self, folder_id: int) -> None:
        self._request("DELETE", f"/folders/{folder_id}")

    def move_page(self, page_id: int, folder_id: Optional[int]) -> PageResponse:
        data = self._request("PUT", f"/folders/move-page/{page_id}", json={"folder_id": folder_id})
        return _parse(PageResponse, data)


def _detail(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return str(body)


def _parse(model, data):
    """Valide un corps de réponse; un corps inattendu devient une erreur serveur"""
    try:
        return model.model_validate(data)
    except SchemaError as e:
        raise NetworkOrServerError(f"Unexpected {model.__name__} payload: {e.error_count()} invalid field(s)") from e


def _parse_list(model, data) -> list:
    if not isinstance(data, list):
        raise NetworkOrServerError(f"Expected a list of {model.__name__}")
    return [_parse(model, item) for item in data]
