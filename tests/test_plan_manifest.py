import tempfile
import unittest
from pathlib import Path

from multirun.suites.manifest import build_plan_manifest, write_plan_manifest
from tools.io import read_json

RUNS = {
    "smoke:chunk1:chrome1": {
        "tests": "{a.js,b.js}",
        "browser": {"browser": "chrome"},
        "parent_suite_name": "smoke",
    },
    "smoke:chunk2:chrome1": {
        "tests": "c.js",
        "browser": {"browser": "chrome"},
        "parent_suite_name": "smoke",
        "chunks_fn": len,
    },
}


class TestPlanManifest(unittest.TestCase):
    def test_manifest_without_commands(self) -> None:
        manifest = build_plan_manifest(runs=RUNS, selection=["smoke"], config_path="multirun.yaml")

        self.assertEqual(1, manifest["schema_version"])
        self.assertEqual(["smoke"], manifest["selection"])
        self.assertEqual(2, manifest["run_count"])
        self.assertEqual(list(RUNS), list(manifest["runs"]))

        entry = manifest["runs"]["smoke:chunk1:chrome1"]
        self.assertEqual("smoke", entry["parent_suite_name"])
        self.assertEqual({"browser": "chrome"}, entry["browser"])
        self.assertEqual("{a.js,b.js}", entry["tests"])
        self.assertNotIn("command", entry)

        # Non-JSON values are stored as their repr.
        self.assertIsInstance(manifest["runs"]["smoke:chunk2:chrome1"]["config"]["chunks_fn"], str)

    def test_manifest_with_commands_round_trips_to_disk(self) -> None:
        manifest = build_plan_manifest(runs=RUNS, selection=["smoke"], runner=["codeceptjs", "run"], output_root="out")

        with tempfile.TemporaryDirectory() as td:
            path = write_plan_manifest(Path(td) / "plans" / "plan.json", manifest)
            self.assertTrue(path.exists())
            data = read_json(path)

        cmd = data["runs"]["smoke:chunk2:chrome1"]["command"]
        self.assertEqual(["codeceptjs", "run", "--child", "smoke:chunk2:chrome1", "--override"], cmd[:5])


if __name__ == "__main__":
    unittest.main()
