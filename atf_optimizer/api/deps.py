"""Wiring of the optimizer's collaborators for the HTTP layer."""

from functools import lru_cache, partial

from atf_optimizer.config import settings
from atf_optimizer.core.database import build_engine, build_session_factory
from atf_optimizer.core.options import Options
from atf_optimizer.core.security import create_nonce
from atf_optimizer.services.beacon import BeaconInjector, LocalFilesystem
from atf_optimizer.services.context import AboveTheFoldContext
from atf_optimizer.services.controller import AboveTheFoldController
from atf_optimizer.services.filters import FilterRegistry
from atf_optimizer.services.queries import AboveTheFoldQuery

# Process-wide filters; register overrides at startup
filter_registry = FilterRegistry()

engine = build_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
)
session_factory = build_session_factory(engine)


@lru_cache
def get_controller() -> AboveTheFoldController:
    beacon = BeaconInjector(
        filesystem=LocalFilesystem(),
        filters=filter_registry,
        nonce_factory=partial(
            create_nonce, settings.SECRET_KEY, lifetime=settings.NONCE_LIFETIME_SECONDS
        ),
        ajax_url=settings.AJAX_URL,
        assets_path=settings.BEACON_ASSETS_PATH,
        assets_url=settings.BEACON_ASSETS_URL,
        script_debug=settings.SCRIPT_DEBUG,
    )
    return AboveTheFoldController(
        options=Options.from_settings(settings),
        store=AboveTheFoldQuery(session_factory),
        context=AboveTheFoldContext(settings.ATF_OPTIMIZATION_ENABLED, filter_registry),
        beacon=beacon,
        home_url=settings.HOME_URL,
    )
