import logging
from typing import Any, Dict, List, Tuple

import pytest

from hoverdict import logging_manager as log_mgr
from hoverdict.candidates.entries import build_entry_builder
from hoverdict.config.settings import LookupSettings
from hoverdict.lookup.lookuper import Lookuper
from hoverdict.lookup.render import HtmlGenerator
from hoverdict.lookup.store import InMemoryDescriptionStore

DICTIONARY: Dict[str, str] = {
    "apple": "A round fruit.\nGrows on trees.",
    "run": "to move fast <→sprint>",
    "sprint": "a short fast race ＝dash、",
    "dash": "a quick movement",
    "ox": "a bovine animal",
    "take someone": "to bring someone along",
}


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def store() -> InMemoryDescriptionStore:
    return InMemoryDescriptionStore(DICTIONARY)


@pytest.fixture
def updates() -> List[Tuple[Any, int]]:
    return []


@pytest.fixture
def make_lookuper(store, updates):
    def _factory(settings: LookupSettings | None = None, **kwargs: Any) -> Lookuper:
        resolved = settings or LookupSettings()
        options: Dict[str, Any] = {
            "store": store,
            "entry_builder": build_entry_builder(),
            "renderer": HtmlGenerator(resolved.short_word_length),
            "on_update": lambda content, hits: updates.append((content, hits)),
        }
        options.update(kwargs)
        return Lookuper(resolved, **options)

    return _factory


@pytest.fixture
def hoverdict_events():
    """Collect the ``event`` field of every record logged under ``hoverdict``."""

    logger = logging.getLogger("hoverdict")
    handler = _ListHandler()
    handler.addFilter(log_mgr.LogContextFilter())
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
