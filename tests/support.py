"""
tests/support.py
================
Shared PASS/FAIL reporting for the test modules.  check() both prints and
asserts, so every module runs as a plain script or under pytest.
"""

import os
import sys
import traceback

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

PASS = "\033[32mPASS\033[0m"
FAIL = "\033[31mFAIL\033[0m"
_results = []


def check(name, condition, detail=""):
    status = PASS if condition else FAIL
    line = f"  [{status}] {name}"
    if detail:
        line += f"\n           {detail}"
    print(line)
    _results.append((name, bool(condition)))
    assert condition, name
    return bool(condition)


def expect_raises(exc_type, fn, *args, **kwargs):
    """True iff fn(*args, **kwargs) raises exc_type."""
    try:
        fn(*args, **kwargs)
    except exc_type:
        return True
    return False


class ScriptedRandom:
    """Random source that replays a fixed list of draws."""

    def __init__(self, values):
        self._values = list(values)

    def randrange(self, start, stop):
        value = self._values.pop(0)
        assert start <= value < stop
        return value


class BrokenRandom:
    """Random source whose entropy pool is gone."""

    def randrange(self, start, stop):
        raise OSError("entropy source unavailable")


def run_all(title, tests):
    print("=" * 62)
    print(f"  {title}")
    print("=" * 62)

    for test in tests:
        try:
            test()
        except AssertionError:
            pass
        except Exception:
            _results.append((test.__name__, False))
            traceback.print_exc()

    print("\n" + "=" * 62)
    passed = sum(1 for _, ok in _results if ok)
    total  = len(_results)
    colour = "\033[32m" if passed == total else "\033[31m"
    print(f"  {colour}Results: {passed}/{total} passed\033[0m")
    if passed < total:
        print("  Failed:")
        for name, ok in _results:
            if not ok:
                print(f"    ✗  {name}")
    print("=" * 62)
    return passed == total
