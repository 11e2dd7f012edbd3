"""Smoke tests for the example scripts.

These tests verify that examples run without errors.
They don't verify the quality of the flight, just that the code executes.
"""

import subprocess
import sys
from pathlib import Path

EXAMPLES_DIR = Path(__file__).parent.parent / "ringflight" / "examples"


def run_example(example_name: str, cwd: Path, timeout: int = 120) -> subprocess.CompletedProcess:
    """Run an example script and return the result."""
    script_path = EXAMPLES_DIR / f"{example_name}.py"

    result = subprocess.run(
        [sys.executable, str(script_path)],
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=cwd,
    )

    return result


class TestExamplesSmoke:
    """Smoke tests that verify examples run without crashing."""

    def test_scripted_flight_runs(self, tmp_path: Path) -> None:
        """Test that scripted_flight.py runs and writes its outputs."""
        result = run_example("scripted_flight", cwd=tmp_path)
        assert result.returncode == 0, f"scripted_flight failed:\n{result.stderr}"
        assert "FLIGHT COMPLETE" in result.stdout

        output_dir = tmp_path / "outputs" / "scripted_flight"
        assert (output_dir / "trajectory.csv").exists()
        assert (output_dir / "flight_path.png").exists()
