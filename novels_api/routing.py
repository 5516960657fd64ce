import os
import pkgutil
from importlib import import_module

from fastapi import APIRouter

from novels_api.logging import logger

# Track registered modules to prevent duplicate logging
_registered_http_modules: set[str] = set()


def collect_subrouters() -> APIRouter:
    """
    Collects and registers all HTTP routers of the application.

    Every module in the ``api/http`` directory exposes a ``router``; each
    resource router already carries its own prefix (``/api/authors``, ...)
    so they are mounted as-is on a single main router, which is returned as
    the entry point of the application's API.
    """
    main_router: APIRouter = APIRouter()

    package_dir = os.path.dirname(__file__)
    package_name = os.path.basename(package_dir)

    for _, module, _ in pkgutil.iter_modules([f"{package_dir}/api/http"]):
        api = import_module(f".{module}", package=f"{package_name}.api.http")

        main_router.include_router(api.router)

        # Only log on first registration
        if module not in _registered_http_modules:
            logger.info(f'Register "{module}" api')
            _registered_http_modules.add(module)

    return main_router
