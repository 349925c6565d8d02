import json
import tempfile
import types
import unittest
from pathlib import Path

from workshop.core.provenance import New, Overflow, Tier
from workshop.core.simulation import run_input, simulate
from workshop.core.workshop import Workshop
from workshop.errors import InvariantViolation
from workshop.io.reader import WorkshopInput
from workshop.observability.metrics import MetricsRecorder


class TestSimulate(unittest.TestCase):
    def test_yields_one_provenance_per_item(self):
        out = simulate([1], [10, 20, 10, 30])
        self.assertIsInstance(out, types.GeneratorType)
        self.assertEqual(list(out), [New, New, Overflow, New])
        # exhausted, not restartable
        self.assertEqual(list(out), [])

    def test_is_lazy(self):
        consumed = []

        def items():
            for i in (1, 2, 3):
                consumed.append(i)
                yield i

        gen = simulate([2], items())
        self.assertEqual(consumed, [])
        self.assertEqual(next(gen), New)
        self.assertEqual(consumed, [1])

    def test_uses_given_workshop(self):
        shop = Workshop([1, 1])
        list(simulate([1, 1], [1, 2, 3], workshop=shop))
        self.assertEqual(shop.snapshot()["tiers"], [[2], [1]])

    def test_rejects_workshop_with_other_tiers(self):
        with self.assertRaises(InvariantViolation):
            list(simulate([1, 1], [1, 2], workshop=Workshop([9])))
        with self.assertRaises(InvariantViolation):
            run_input(WorkshopInput(capacities=(1,), items=(1,)), workshop=Workshop([]))

    def test_recorder_reused_across_runs(self):
        recorder = MetricsRecorder("unused", write=False)
        list(simulate([1], [1, 2], recorder=recorder))
        first = recorder.end_and_write()
        list(simulate([1], [3, 4, 5], recorder=recorder))
        second = recorder.end_and_write()
        self.assertIsNotNone(second)
        self.assertIsNot(first, second)
        self.assertEqual(first.items, 2)
        self.assertEqual(second.items, 3)
        self.assertEqual(second.new, 3)
        self.assertIs(recorder.current, second)


class TestRunInput(unittest.TestCase):
    def test_without_recorder(self):
        data = WorkshopInput(capacities=(1, 2), items=(1, 2, 3, 1))
        self.assertEqual(run_input(data), [New, New, New, Tier(2)])

    def test_recorder_aggregates_and_writes_trace(self):
        with tempfile.TemporaryDirectory() as td:
            recorder = MetricsRecorder(td)
            data = WorkshopInput(capacities=(1,), items=(10, 20, 10, 30, 30))
            out = run_input(data, recorder=recorder, label="unit")
            self.assertEqual(out, [New, New, Overflow, New, Tier(1)])

            files = list(Path(td).glob("metrics-*.jsonl"))
            self.assertEqual(len(files), 1)
            rows = [json.loads(ln) for ln in files[0].read_text(encoding="utf-8").splitlines()]
            self.assertEqual(len(rows), 1)
            self.assertEqual(rows[0]["type"], "metrics")
            m = rows[0]["data"]
            self.assertEqual(m["label"], "unit")
            self.assertEqual(m["items"], 5)
            self.assertEqual(m["new"], 3)
            self.assertEqual(m["overflow"], 1)
            self.assertEqual(m["tier_hits"], {"1": 1})
            self.assertEqual(m["max_cascade_depth"], 1)
            # 10, 20, then 10 again were pushed out of tier 1
            self.assertEqual(m["overflow_spills"], 3)
            self.assertIsNone(m["error"])

    def test_recorder_without_writing(self):
        with tempfile.TemporaryDirectory() as td:
            recorder = MetricsRecorder(td, write=False)
            run_input(WorkshopInput(capacities=(), items=(1, 1)), recorder=recorder)
            self.assertEqual(list(Path(td).iterdir()), [])
            run = recorder.current
            self.assertEqual((run.items, run.new, run.overflow), (2, 1, 1))
            self.assertAlmostEqual(run.hit_ratio, 0.5)

    def test_invariant_violation_propagates_and_is_traced(self):
        with tempfile.TemporaryDirectory() as td:
            recorder = MetricsRecorder(td)
            with self.assertRaises(InvariantViolation):
                run_input(WorkshopInput(capacities=(1,), items=(1, None)), recorder=recorder)
            line = next(Path(td).glob("metrics-*.jsonl")).read_text(encoding="utf-8").strip()
            self.assertIn("cannot process None", json.loads(line)["data"]["error"])


if __name__ == "__main__":
    unittest.main()
