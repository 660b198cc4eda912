"""Shared FastAPI dependencies."""

from fastapi import Depends, Header, HTTPException, Request, status

from savr.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def _get_api_token(container: AppContainer = Depends(get_container)) -> str:
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
