"""
Tests for the boundary-tracer command line.
"""

import pytest
import subprocess
import sys
import os
import json
import cv2

from boundary_tracer.cli import main
from tests.fixtures.boundary_fixtures import (
    create_black_image,
    create_border_image,
    create_quadrant_border,
)

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "boundary_tracer", *args],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
    )


@pytest.fixture
def ring_path(tmp_path):
    path = tmp_path / "ring.png"
    cv2.imwrite(str(path), create_border_image())
    return str(path)


@pytest.fixture
def black_path(tmp_path):
    path = tmp_path / "black.png"
    cv2.imwrite(str(path), create_black_image())
    return str(path)


class TestExtractCommand:
    """Tests for the extract command."""

    def test_writes_output(self, ring_path, tmp_path):
        """Test that a boundary image is written for a marked image."""
        output_path = tmp_path / "out.png"

        result = run_cli("extract", ring_path, "--output-path", str(output_path))

        assert result.returncode == 0
        assert "Boundary drawn successfully" in result.stdout
        assert output_path.exists()
        assert cv2.imread(str(output_path)).shape == (200, 200, 3)

    def test_no_boundary(self, black_path, tmp_path):
        """Test that an image without markers reports and writes nothing."""
        output_path = tmp_path / "out.png"

        result = run_cli("extract", black_path, "--output-path", str(output_path))

        assert result.returncode == 0
        assert f"No boundary found: {black_path}" in result.stdout
        assert not output_path.exists()

    def test_missing_file(self, tmp_path):
        """Test that an unreadable input exits with an error."""
        missing = str(tmp_path / "missing.png")

        result = run_cli("extract", missing)

        assert result.returncode == 1
        assert f"Could not load image: {missing}" in result.stderr

    def test_json_output(self, ring_path, black_path):
        """Test JSON summary output."""
        result = run_cli("extract", ring_path, black_path, "-o", "json")

        assert result.returncode == 0
        output = json.loads(result.stdout)
        assert output["total_files"] == 2
        assert output["successful"] == 1
        assert output["results"][0]["status"] == "success"
        assert output["results"][0]["boundary"]["vertex_count"] >= 4
        assert output["results"][1]["status"] == "no_boundary"

    def test_multiple_inputs_use_output_dir(self, ring_path, black_path, tmp_path):
        """Test that several inputs are written into the output directory."""
        out_dir = tmp_path / "out"

        result = run_cli("extract", ring_path, black_path, "--output-dir", str(out_dir))

        assert result.returncode == 0
        assert (out_dir / "ring_boundary.png").exists()
        assert not (out_dir / "black_boundary.png").exists()

    def test_config_file(self, ring_path, tmp_path):
        """Test that a YAML config is applied."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("boundary_extraction:\n  stroke_width: 4\n")

        result = run_cli("extract", ring_path, "--config", str(config_path), "-o", "json")

        assert result.returncode == 0
        assert json.loads(result.stdout)["successful"] == 1


class TestCombineCommand:
    """Tests for the combine command."""

    def test_combined_output(self, tmp_path):
        """Test overlaying two quadrant boundaries."""
        paths = []
        for quadrant in ("top_left", "bottom_right"):
            path = tmp_path / f"{quadrant}.png"
            cv2.imwrite(str(path), create_quadrant_border(quadrant))
            paths.append(str(path))
        output_path = tmp_path / "combined.png"

        result = run_cli("combine", *paths, "--output-path", str(output_path))

        assert result.returncode == 0
        assert "Combined 2/2 boundaries" in result.stdout
        canvas = cv2.imread(str(output_path))
        assert canvas.shape == (200, 200, 3)
        assert (canvas == 0).any()

    def test_skips_missing_and_empty(self, ring_path, black_path, tmp_path):
        """Test that unreadable and marker-free images are skipped."""
        missing = str(tmp_path / "missing.png")
        output_path = tmp_path / "combined.png"

        result = run_cli(
            "combine", missing, ring_path, black_path,
            "--output-path", str(output_path), "--workers", "2",
        )

        assert result.returncode == 0
        assert "Combined 1/3 boundaries" in result.stdout
        assert "Could not load image" in result.stderr
        assert output_path.exists()

    def test_all_missing(self, tmp_path):
        """Test that a batch with nothing loadable exits with an error."""
        output_path = tmp_path / "combined.png"

        result = run_cli("combine", str(tmp_path / "a.png"), "--output-path", str(output_path))

        assert result.returncode == 1
        assert not output_path.exists()

    def test_json_output(self, ring_path, black_path):
        """Test JSON summary output."""
        result = run_cli("combine", ring_path, black_path, "-o", "json")

        assert result.returncode == 0
        output = json.loads(result.stdout)
        assert output["drawn_count"] == 1
        assert output["canvas_shape"] == {"height": 200, "width": 200}


class TestMain:
    """Tests for argument handling in main()."""

    def test_no_command_prints_help(self, capsys):
        """Test that running without a command shows help."""
        assert main([]) == 0
        assert "extract" in capsys.readouterr().out

    def test_rejects_zero_workers(self, ring_path, capsys):
        """Test that --workers must be positive."""
        assert main(["combine", ring_path, "--workers", "0"]) == 1
        assert "--workers" in capsys.readouterr().err

    def test_help(self):
        """Test --help via the module entry point."""
        result = run_cli("--help")

        assert result.returncode == 0
        assert "combine" in result.stdout
