from __future__ import annotations

import subprocess
import sys


def _run(args: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(args, capture_output=True, text=True, check=False)


def test_api_server_cli_help():
    proc = _run([sys.executable, "-m", "multiai.apps.api_server", "--help"])
    assert proc.returncode == 0, proc.stderr
    assert "--port" in proc.stdout
    assert "--config" in proc.stdout
