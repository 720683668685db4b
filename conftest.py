import pytest
from prometheus_client import CollectorRegistry

from counter_pallet import metrics
from counter_pallet.config import load_config
from counter_pallet.runtime.executor import CounterRuntime
from counter_pallet.runtime.pallet import CounterPallet
from counter_pallet.state.journal import Journal
from counter_pallet.state.storage import StorageView
from counter_pallet.types.origin import Origin
from counter_pallet.weights.table import load_weight_table

ALICE = b"\xaa" * 32
BOB = b"\xbb" * 32


@pytest.fixture(autouse=True)
def _fresh_metrics_registry():
    """Each test gets its own Prometheus registry so counters start at zero."""
    reg = CollectorRegistry()
    metrics.set_registry(reg)
    yield reg


@pytest.fixture
def config():
    # Env-independent: the scenario tests assume CounterMaxValue = 100.
    return load_config(env={}, overrides={"counter_max_value": 100})


@pytest.fixture
def weights():
    return load_weight_table()


@pytest.fixture
def storage():
    return StorageView()


@pytest.fixture
def journal(storage):
    return Journal(storage)


@pytest.fixture
def pallet(journal, config, weights):
    return CounterPallet(journal, config=config, weights=weights)


@pytest.fixture
def runtime(config, weights):
    return CounterRuntime.in_memory(config=config, weights=weights)


@pytest.fixture
def root():
    return Origin.root()


@pytest.fixture
def alice():
    return Origin.signed(ALICE)


@pytest.fixture
def bob():
    return Origin.signed(BOB)
