import json
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "scripts"))

import import_table

FIXTURES = Path(__file__).parent / "fixtures"


def test_import_best_routes(capsys):
    rc = import_table.main([str(FIXTURES / "cisco_v4_basic.txt"), "--best", "--retain-next-hop", "--prefix", "cli"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["names"] == ["cli-6", "cli-8", "cli-10"]
    assert out["diagnostics"] == []


def test_fatal_error_exit_status(tmp_path, capsys):
    table = tmp_path / "table.txt"
    table.write_text("no header here\n")
    assert import_table.main([str(table)]) == 1
    assert "failed to locate header" in capsys.readouterr().err


def test_unknown_peer(capsys):
    assert import_table.main([str(FIXTURES / "cisco_v4_basic.txt"), "--peer", "nope"]) == 1


def test_juniper_format(capsys):
    assert import_table.main([str(FIXTURES / "cisco_v4_basic.txt"), "--format", "juniper"]) == 1
    assert "Juniper" in capsys.readouterr().err
