import asyncio
import inspect
import pathlib
import sys

import pytest

BACKEND = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from folio_api.config import get_settings  # noqa: E402
from folio_api.providers.alpha_vantage import get_alpha_vantage_client  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "asyncio: mark test as running in an asyncio event loop")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings and the shared price client are cached per process; reset them around each test."""

    get_settings.cache_clear()
    get_alpha_vantage_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_alpha_vantage_client.cache_clear()


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run coroutine tests on a private event loop."""

    test_function = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_function):
        return None
    kwargs = {name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames}
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_function(**kwargs))
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True
