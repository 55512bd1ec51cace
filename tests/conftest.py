import django
import pytest
from django.conf import settings

from api.roadmap_api.model import GraphStore
from api.roadmap_api.services import InputPlugin, RendererPlugin, StoragePlugin
from core.roadmap_platform.seed import SEED_RECORD

if not settings.configured:
    settings.configure(
        DEBUG=True,
        SECRET_KEY="tests-only",
        ALLOWED_HOSTS=["*"],
        ROOT_URLCONF="graph_explorer.explorer.urls",
        INSTALLED_APPS=[],
        MIDDLEWARE=[],
        ROADMAP_STORAGE_DIR=None,
    )
    django.setup()


class ScriptedInput(InputPlugin):
    """Replays canned answers and records everything the editor asked."""

    def __init__(self, answers=None, confirm=True):
        self.answers = list(answers or [])
        self.confirm_answer = confirm
        self.prompts = []
        self.confirms = []
        self.alerts = []

    def prompt(self, message, default=""):
        self.prompts.append((message, default))
        if not self.answers:
            return None
        return self.answers.pop(0)

    def confirm(self, message):
        self.confirms.append(message)
        return self.confirm_answer

    def alert(self, message):
        self.alerts.append(message)


class MemoryStorage(StoragePlugin):
    def __init__(self, record=None):
        self.record = record
        self.saves = 0

    @property
    def plugin_id(self):
        return "memory"

    @property
    def display_name(self):
        return "In-memory"

    def save(self, record):
        self.saves += 1
        self.record = record

    def load(self):
        return self.record


class CountingRenderer(RendererPlugin):
    def __init__(self):
        self.views = []

    @property
    def plugin_id(self):
        return "counting"

    @property
    def display_name(self):
        return "Counting"

    def render(self, view, **options):
        self.views.append(view)
        return f"frame {len(self.views)}"


@pytest.fixture
def seed_graph():
    return GraphStore.from_record(SEED_RECORD)


@pytest.fixture
def scripted_input():
    return ScriptedInput()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def renderer():
    return CountingRenderer()
