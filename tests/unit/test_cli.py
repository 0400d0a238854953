"""
CLI Tests

Runs airdrop_cli.main.main() in-process with temporary files and checks
exit codes and printed output.

Exit codes:
- 0: success / entitlement proven
- 1: runtime error (bad input, missing files, unknown record)
- 2: verification failed
"""
import json
import logging

import pytest

from airdrop_cli import main as cli_main
from airdrop_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, main
from fixtures.common import LEAF_ADDR2_50, ROOT_THREE, ROOT_TWO, make_lcd_delegation, write_json


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch):
    """No config files from the host; restore root logging after each run."""
    monkeypatch.setattr(cli_main, "DEFAULT_CONFIG_PATHS", [])
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def records_file(tmp_path, two_records):
    return write_json(tmp_path / "records.json", two_records)


class TestBuildCommand:
    """airdrop build"""

    def test_build_prints_root(self, records_file, capsys):
        assert main(["build", str(records_file)]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"merkle_root: {ROOT_TWO}" in out
        assert "leaf_count: 2" in out
        assert "total_amount: 150" in out

    def test_build_writes_manifest(self, records_file, tmp_path, capsys):
        out_path = tmp_path / "claims.json"

        assert main(["build", str(records_file), "--out", str(out_path), "--json"]) == EXIT_SUCCESS

        summary = json.loads(capsys.readouterr().out)
        assert summary["success"] is True
        assert summary["merkle_root"] == ROOT_TWO
        assert summary["output_path"] == str(out_path)

        manifest = json.loads(out_path.read_text(encoding="utf-8"))
        assert manifest["claims"][0]["proof"] == [LEAF_ADDR2_50]

    def test_build_mapping_document(self, tmp_path, capsys):
        path = write_json(tmp_path / "map.json", {"addr3": "25", "addr1": "100", "addr2": "50"})

        assert main(["build", str(path)]) == EXIT_SUCCESS
        assert ROOT_THREE in capsys.readouterr().out

    def test_build_without_prefix(self, records_file, capsys, monkeypatch):
        monkeypatch.setenv("AIRDROP_HEX_PREFIX", "false")

        assert main(["build", str(records_file)]) == EXIT_SUCCESS
        assert f"merkle_root: {ROOT_TWO[2:]}" in capsys.readouterr().out

    def test_build_empty_records(self, tmp_path, capsys):
        path = write_json(tmp_path / "empty.json", [])

        assert main(["build", str(path), "--json"]) == EXIT_RUNTIME_ERROR
        summary = json.loads(capsys.readouterr().out)
        assert summary["success"] is False
        assert "zero records" in summary["error"]

    def test_build_invalid_record(self, tmp_path):
        path = write_json(tmp_path / "bad.json", [{"address": "addr1", "amount": "1.5"}])
        assert main(["build", str(path)]) == EXIT_RUNTIME_ERROR

    def test_build_missing_file(self, tmp_path):
        assert main(["build", str(tmp_path / "absent.json")]) == EXIT_RUNTIME_ERROR


class TestProveCommand:
    """airdrop prove"""

    def test_prove_text(self, records_file, capsys):
        code = main(["prove", str(records_file), "--address", "addr1", "--amount", "100"])

        assert code == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert f"merkle_root: {ROOT_TWO}" in out
        assert f"  {LEAF_ADDR2_50}" in out

    def test_prove_json(self, records_file, capsys):
        main(["prove", str(records_file), "--address", "addr2", "--amount", "50", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert data["merkle_root"] == ROOT_TWO
        assert len(data["proof"]) == 1

    def test_prove_unknown_record(self, records_file, capsys):
        code = main(["prove", str(records_file), "--address", "addr1", "--amount", "999"])

        assert code == EXIT_RUNTIME_ERROR
        assert "No leaf" in capsys.readouterr().err


class TestVerifyCommand:
    """airdrop verify"""

    def test_verify_valid(self, capsys):
        code = main([
            "verify", "--root", ROOT_TWO,
            "--address", "addr1", "--amount", "100",
            "--proof", LEAF_ADDR2_50,
        ])

        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("VALID")

    def test_verify_wrong_amount(self, capsys):
        code = main([
            "verify", "--root", ROOT_TWO,
            "--address", "addr1", "--amount", "999",
            "--proof", LEAF_ADDR2_50,
        ])

        assert code == EXIT_VERIFICATION_FAILED
        assert capsys.readouterr().out.startswith("INVALID")

    def test_verify_bare_hex(self):
        code = main([
            "verify", "--root", ROOT_TWO[2:],
            "--address", "addr1", "--amount", "100",
            "--proof", LEAF_ADDR2_50[2:],
        ])
        assert code == EXIT_SUCCESS

    def test_verify_malformed_proof_is_failure(self):
        code = main([
            "verify", "--root", ROOT_TWO,
            "--address", "addr1", "--amount", "100",
            "--proof", "0xnothex",
        ])
        assert code == EXIT_VERIFICATION_FAILED

    @pytest.mark.parametrize("root", ["0xnothex", ROOT_TWO[:-2], ROOT_TWO + "00"])
    def test_verify_malformed_root(self, root, capsys):
        code = main([
            "verify", "--root", root,
            "--address", "addr1", "--amount", "100",
            "--proof", LEAF_ADDR2_50,
        ])

        assert code == EXIT_RUNTIME_ERROR
        assert "INVALID_HEX" in capsys.readouterr().err

    def test_verify_from_claims(self, records_file, tmp_path, capsys):
        claims = tmp_path / "claims.json"
        main(["build", str(records_file), "--out", str(claims)])
        capsys.readouterr()

        code = main([
            "verify", "--claims", str(claims),
            "--address", "addr2", "--amount", "50", "--json",
        ])

        assert code == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is True
        assert data["merkle_root"] == ROOT_TWO

    def test_verify_from_claims_unknown_amount(self, records_file, tmp_path):
        claims = tmp_path / "claims.json"
        main(["build", str(records_file), "--out", str(claims)])

        code = main(["verify", "--claims", str(claims), "--address", "addr2", "--amount", "51"])

        assert code == EXIT_VERIFICATION_FAILED

    def test_verify_requires_root(self, capsys):
        code = main(["verify", "--address", "addr1", "--amount", "100"])

        assert code == EXIT_RUNTIME_ERROR
        assert "root is required" in capsys.readouterr().err

    def test_verify_missing_claims_file(self, tmp_path):
        code = main([
            "verify", "--claims", str(tmp_path / "absent.json"),
            "--address", "addr1", "--amount", "100",
        ])
        assert code == EXIT_RUNTIME_ERROR


class TestSnapshotCommand:
    """airdrop snapshot"""

    def test_snapshot_then_build(self, tmp_path, capsys):
        source = tmp_path / "delegations"
        write_json(source / "val-a.json", [
            make_lcd_delegation("addr1", "val-a", "70"),
            make_lcd_delegation("addr2", "val-a", "50"),
        ])
        write_json(source / "val-b.json", {"result": [make_lcd_delegation("addr1", "val-b", "30")]})
        records = tmp_path / "records.json"

        assert main(["snapshot", str(source), "--out", str(records)]) == EXIT_SUCCESS
        assert json.loads(records.read_text(encoding="utf-8")) == [
            {"address": "addr1", "amount": "100"},
            {"address": "addr2", "amount": "50"},
        ]

        capsys.readouterr()
        assert main(["build", str(records)]) == EXIT_SUCCESS
        assert ROOT_TWO in capsys.readouterr().out

    def test_snapshot_min_amount_from_env(self, tmp_path, monkeypatch):
        source = write_json(tmp_path / "d.json", [
            make_lcd_delegation("addr1", "v", "100"),
            make_lcd_delegation("addr2", "v", "50"),
        ])
        out = tmp_path / "records.json"
        monkeypatch.setenv("AIRDROP_MIN_AMOUNT", "60")

        assert main(["snapshot", str(source), "--out", str(out)]) == EXIT_SUCCESS
        assert [r["address"] for r in json.loads(out.read_text(encoding="utf-8"))] == ["addr1"]

    def test_snapshot_flag_beats_config(self, tmp_path, monkeypatch):
        source = write_json(tmp_path / "d.json", [make_lcd_delegation("addr1", "v", "10")])
        out = tmp_path / "records.json"
        monkeypatch.setenv("AIRDROP_MIN_AMOUNT", "60")

        assert main(["snapshot", str(source), "--out", str(out), "--min-amount", "5"]) == EXIT_SUCCESS
        assert len(json.loads(out.read_text(encoding="utf-8"))) == 1

    def test_snapshot_malformed(self, tmp_path, capsys):
        source = write_json(tmp_path / "d.json", {"unexpected": True})

        code = main(["snapshot", str(source), "--out", str(tmp_path / "r.json")])

        assert code == EXIT_RUNTIME_ERROR
        assert "result" in capsys.readouterr().err


class TestConfigAndDispatch:
    """airdrop config and top-level behaviour"""

    def test_config_show_defaults(self, capsys):
        assert main(["config", "--show"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["output"] == {"hex_prefix": True, "indent": 2}
        assert data["snapshot"] == {"min_amount": 0}

    def test_config_file_and_env(self, tmp_path, capsys, monkeypatch):
        path = tmp_path / "airdrop.yaml"
        path.write_text("output:\n  indent: 4\nsnapshot:\n  min_amount: 7\n", encoding="utf-8")
        monkeypatch.setenv("AIRDROP_MIN_AMOUNT", "9")

        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["output"]["indent"] == 4
        assert data["snapshot"]["min_amount"] == 9

    def test_missing_config_file(self, tmp_path, capsys):
        code = main(["--config", str(tmp_path / "absent.yaml"), "config", "--show"])

        assert code == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()

    def test_log_level_flag(self, records_file):
        assert main(["--log-level", "DEBUG", "build", str(records_file)]) == EXIT_SUCCESS
        assert logging.getLogger().level == logging.DEBUG
