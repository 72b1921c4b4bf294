"""
Pytest Configuration and Fixtures

This module provides:
- A per-run report written to test_results/
- Shared fixtures: in-memory store, repository, controller with a fixed clock
- Test category markers
"""

import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Dict, Any

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.test_config import (
    CONFIG, EXPECTED, TEST_DATA, MESSAGES, TEST_CATEGORIES,
    get_sample_row, get_all_sample_rows,
)


# =============================================================================
# TEST RESULT FILE CONFIGURATION
# =============================================================================

RESULTS_DIR = PROJECT_ROOT / "test_results"


def get_result_filename() -> str:
    """Generate timestamped result filename."""
    return f"test_results_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"


# =============================================================================
# PYTEST HOOKS FOR CUSTOM OUTPUT
# =============================================================================

class ResultCollector:
    """Collects test call outcomes grouped by test module."""

    def __init__(self):
        self.results: List[Dict[str, Any]] = []
        self.categories: Dict[str, List[Dict[str, Any]]] = {}
        self.start_time: datetime = None
        self.end_time: datetime = None

    def add_result(self, nodeid: str, outcome: str, duration: float, message: str = ""):
        category = self.category_of(nodeid)
        result = {
            "nodeid": nodeid,
            "name": self.readable_name(nodeid),
            "category": category,
            "outcome": outcome,
            "duration": duration,
            "message": message,
        }
        self.results.append(result)
        self.categories.setdefault(category, []).append(result)

    @staticmethod
    def category_of(nodeid: str) -> str:
        # tests/test_system_scenarios.py::TestClass::test_method -> system_scenarios
        filename = nodeid.split("::")[0].split("/")[-1]
        return filename.replace("test_", "", 1).replace(".py", "")

    @staticmethod
    def readable_name(nodeid: str) -> str:
        method = nodeid.split("::")[-1]
        return method.replace("test_", "", 1).replace("_", " ").title()

    def summary(self) -> Dict[str, int]:
        outcomes = [r["outcome"] for r in self.results]
        return {
            "total": len(outcomes),
            "passed": outcomes.count("passed"),
            "failed": outcomes.count("failed"),
            "skipped": outcomes.count("skipped"),
        }


_collector = ResultCollector()


def pytest_configure(config):
    """Register markers and start the collector."""
    for marker, description in (
        ("config_validation", "Configuration validation tests"),
        ("scenarios", "End-to-end feed flows"),
        ("cli_behavior", "CLI interface tests"),
        ("policy", "Quota and validation rules"),
        ("storage", "Entry store tests"),
        ("web", "Flask client tests"),
    ):
        config.addinivalue_line("markers", f"{marker}: {description}")

    _collector.start_time = datetime.now()
    RESULTS_DIR.mkdir(exist_ok=True)


def pytest_runtest_logreport(report):
    """Record the call phase of each test."""
    if report.when == "call":
        _collector.add_result(
            nodeid=report.nodeid,
            outcome=report.outcome,
            duration=report.duration,
            message=str(report.longrepr) if report.longrepr else "",
        )


def pytest_sessionfinish(session, exitstatus):
    """Write the report file and print a short summary."""
    _collector.end_time = datetime.now()
    save_report(generate_formatted_report(_collector))
    print_summary(_collector)


def generate_formatted_report(collector: ResultCollector) -> str:
    """Generate a plain-text report grouped by category."""
    summary = collector.summary()
    pass_rate = summary["passed"] / max(summary["total"], 1) * 100

    lines = [
        "=" * 80,
        "NOOSPACE - TEST RESULTS REPORT",
        "=" * 80,
        "",
        f"Run Date:     {collector.start_time.strftime('%Y-%m-%d %H:%M:%S')}",
    ]
    if collector.end_time:
        duration = (collector.end_time - collector.start_time).total_seconds()
        lines.append(f"Duration:     {duration:.2f} seconds")

    lines += [
        "",
        "-" * 40,
        "SUMMARY",
        "-" * 40,
        f"Total Tests:  {summary['total']}",
        f"Passed:       {summary['passed']} ✓",
        f"Failed:       {summary['failed']} ✗",
        f"Skipped:      {summary['skipped']} ○",
        f"Pass Rate:    {pass_rate:.1f}%",
        "",
    ]

    for category, results in sorted(collector.categories.items()):
        info = TEST_CATEGORIES.get(category, {
            "name": category.replace("_", " ").title(),
            "description": "Test category",
            "protects_against": [],
        })
        passed = sum(1 for r in results if r["outcome"] == "passed")
        failed = sum(1 for r in results if r["outcome"] == "failed")

        lines += [
            "",
            f"## {info['name']}  ({passed} passed, {failed} failed)",
            f"   {info['description']}",
        ]
        for protection in info.get("protects_against", []):
            lines.append(f"   • {protection}")
        lines.append("")

        for result in results:
            status = {"passed": "✓", "failed": "✗"}.get(result["outcome"], "○")
            lines.append(f"    {status} {result['name']:<60} ({result['duration'] * 1000:.0f}ms)")
            if result["outcome"] == "failed":
                for msg_line in result["message"].split("\n")[:3]:
                    if msg_line.strip():
                        lines.append(f"      └─ {msg_line[:70]}")

    failed_tests = [r for r in collector.results if r["outcome"] == "failed"]
    if failed_tests:
        lines += ["", "=" * 80, "FAILED TESTS DETAIL", "=" * 80]
        for result in failed_tests:
            lines += ["", f"FAILED: {result['nodeid']}", "-" * 40]
            lines += [f"  {line}" for line in result["message"].split("\n")[:10]]

    lines += ["", "=" * 80, "END OF REPORT", "=" * 80]
    return "\n".join(lines)


def save_report(report: str):
    """Save report to timestamped file."""
    filepath = RESULTS_DIR / get_result_filename()
    filepath.write_text(report, encoding="utf-8")
    print(f"\n📄 Test results saved to: {filepath}")


def print_summary(collector: ResultCollector):
    summary = collector.summary()
    print("\n" + "=" * 60)
    print(
        f"Total: {summary['total']} | Passed: {summary['passed']} | "
        f"Failed: {summary['failed']} | Skipped: {summary['skipped']}"
    )
    print("=" * 60)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def fixed_now():
    """The fixed instant used as "now" by controller tests."""
    return datetime(*CONFIG["today"], tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    """A clock callable that always returns fixed_now."""
    return lambda: fixed_now


@pytest.fixture
def sample_row():
    """A single store row."""
    return get_sample_row(0)


@pytest.fixture
def sample_rows():
    """All sample store rows, in ascending date order."""
    return get_all_sample_rows()


@pytest.fixture
def sample_entries(sample_rows):
    """Sample rows as Entry objects."""
    from noospace.models.entry import Entry
    return [Entry.from_row(row) for row in sample_rows]


@pytest.fixture
def mock_store(sample_rows):
    """In-memory store seeded with the sample rows."""
    from noospace.storage import MockSupabaseStore
    return MockSupabaseStore(rows=sample_rows)


@pytest.fixture
def empty_store():
    """In-memory store with no rows."""
    from noospace.storage import MockSupabaseStore
    return MockSupabaseStore()


@pytest.fixture
def repository(mock_store):
    from noospace.repository import EntryRepository
    return EntryRepository(mock_store)


@pytest.fixture
def controller(repository, clock):
    """Controller over the seeded store, already loaded."""
    from noospace.controller import FeedController
    controller = FeedController(repository, clock=clock)
    controller.load()
    return controller


@pytest.fixture
def empty_controller(empty_store, clock):
    """Controller over an empty store, already loaded."""
    from noospace.controller import FeedController
    from noospace.repository import EntryRepository
    controller = FeedController(EntryRepository(empty_store), clock=clock)
    controller.load()
    return controller


@pytest.fixture
def failing_store():
    """A store whose every operation raises StoreError."""
    from unittest.mock import Mock
    from noospace.storage import EntryStore, StoreError

    store = Mock(spec=EntryStore)
    store.name = "failing"
    store.select_all.side_effect = StoreError("select", "connection refused")
    store.insert.side_effect = StoreError("insert", "connection refused")
    store.update.side_effect = StoreError("update", "connection refused")
    store.delete.side_effect = StoreError("delete", "connection refused")
    return store


@pytest.fixture
def test_config():
    return CONFIG


@pytest.fixture
def expected_values():
    return EXPECTED


@pytest.fixture
def test_data():
    return TEST_DATA


@pytest.fixture
def messages():
    return MESSAGES
