"""Dependency providers for FastAPI.

One container and one facade are shared by every request; the complaint log
they hold is the process-wide store.
"""

from functools import lru_cache
from typing import Optional

from dependency_injector import providers

from pharmarisk.config import Settings
from pharmarisk.container import AppContainer
from pharmarisk.facade import RiskQueryFacade

_container: Optional[AppContainer] = None
_facade: Optional[RiskQueryFacade] = None


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_container() -> AppContainer:
    global _container
    if _container is None:
        _container = AppContainer()
        _container.settings.override(providers.Object(get_settings()))
    return _container


def get_facade() -> RiskQueryFacade:
    global _facade
    if _facade is None:
        _facade = RiskQueryFacade(container=get_container())
    return _facade


def reset() -> None:
    """Tear down the shared facade; the next request builds a fresh one."""
    global _container, _facade
    if _facade is not None:
        _facade.close()
    _container = None
    _facade = None
