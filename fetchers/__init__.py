# fetchers/__init__.py
from . import kirka

FETCHERS = {
    "kirka": kirka.fetch_page,
}
