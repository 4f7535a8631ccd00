import tempfile
import unittest
from pathlib import Path

from tools.io import read_json, write_json


class TestSafeIO(unittest.TestCase):
    def test_write_json_is_atomic_and_cleans_temp(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            out_dir = root / "out"
            out_path = out_dir / "plan.json"

            payload = {"a": 1, "b": True, "c": None, "nested": {"x": "y"}}
            write_json(out_path, payload)

            self.assertTrue(out_path.exists())
            self.assertEqual(payload, read_json(out_path))

            # No temp files left behind on success
            leftovers = [p.name for p in out_dir.iterdir() if p.name.endswith(".tmp")]
            self.assertEqual([], leftovers)

    def test_write_json_replaces_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "plan.json"
            write_json(path, {"v": 1})
            write_json(path, {"v": 2})
            self.assertEqual({"v": 2}, read_json(path))

    def test_failed_write_keeps_previous_content(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "plan.json"
            write_json(path, {"v": 1})

            with self.assertRaises(TypeError):
                write_json(path, {"v": object()})

            self.assertEqual({"v": 1}, read_json(path))
            self.assertEqual(["plan.json"], sorted(p.name for p in Path(td).iterdir()))


if __name__ == "__main__":
    unittest.main()
