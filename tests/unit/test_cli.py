"""
CLI Tests
Tests for autotrace_cli (main entry point and subcommands).

Standard output must carry only the result; errors go to stderr.
"""
import io
import json
import sys

import pytest

from autotrace_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
)


SHA256_ABC = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def _stdin(monkeypatch, data: bytes) -> None:
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


class TestRunCommand:

    def test_run_from_stdin(self, monkeypatch, capsys):
        _stdin(monkeypatch, b'{"op": "hash", "payload": "abc"}')

        assert main(["run"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == SHA256_ABC + "\n"

    def test_run_from_file(self, tmp_path, capsys):
        path = tmp_path / "request.json"
        path.write_text('{"op": "merkle-root", "leaves": []}')

        assert main(["run", "--input", str(path)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "0" * 64 + "\n"

    def test_run_malformed(self, monkeypatch, capsys):
        _stdin(monkeypatch, b'{"op": "nope"}')

        assert main(["run"]) == EXIT_RUNTIME_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "MALFORMED_REQUEST" in captured.err

    def test_run_limit_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("AUTOTRACE_MAX_LEAVES", "1")
        _stdin(monkeypatch, b'{"op": "merkle-root", "leaves": ["a", "b"]}')

        assert main(["run"]) == EXIT_RUNTIME_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "RESOURCE_LIMIT_EXCEEDED" in captured.err

    def test_run_missing_input_file(self, tmp_path, capsys):
        assert main(["run", "--input", str(tmp_path / "missing.json")]) == EXIT_RUNTIME_ERROR
        assert capsys.readouterr().out == ""


class TestDigestCommands:

    def test_hash(self, capsys):
        assert main(["hash", "abc"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == SHA256_ABC

    def test_merkle_root_matches_run(self, monkeypatch, capsys):
        assert main(["merkle-root", "a", "b", "c"]) == EXIT_SUCCESS
        direct = capsys.readouterr().out

        _stdin(monkeypatch, b'{"op": "merkle-root", "leaves": ["a", "b", "c"]}')
        assert main(["run"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == direct

    def test_merkle_root_no_leaves(self, capsys):
        assert main(["merkle-root"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "0" * 64

    def test_payload_limit_from_config_file(self, tmp_path, capsys):
        (tmp_path / "autotrace.json").write_text(json.dumps({"limits": {"max_payload_bytes": 2}}))
        assert main(["hash", "abc"]) == EXIT_RUNTIME_ERROR
        assert "RESOURCE_LIMIT_EXCEEDED" in capsys.readouterr().err


class TestProofCommands:

    def _prove(self, capsys, *argv):
        assert main(["prove", *argv]) == EXIT_SUCCESS
        return json.loads(capsys.readouterr().out)

    def test_prove_document_shape(self, capsys):
        document = self._prove(capsys, "--index", "2", "a", "b", "c")
        assert set(document) == {"leaf", "index", "root", "path"}
        assert document["index"] == 2
        assert len(document["path"]) == 2

    def test_prove_then_verify(self, tmp_path, capsys):
        document = self._prove(capsys, "--index", "1", "a", "b", "c", "d", "e")
        path = tmp_path / "proof.json"
        path.write_text(json.dumps(document))

        assert main(["verify-proof", str(path), "--payload", "b"]) == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == "valid"

    def test_verify_wrong_payload(self, tmp_path, capsys):
        document = self._prove(capsys, "--index", "0", "a", "b")
        path = tmp_path / "proof.json"
        path.write_text(json.dumps(document))

        assert main(["verify-proof", str(path), "--payload", "x", "--json"]) == EXIT_VERIFICATION_FAILED
        result = json.loads(capsys.readouterr().out)
        assert result["ok"] is False
        assert result["leaf_matches_payload"] is False

    def test_verify_tampered_root_from_stdin(self, monkeypatch, capsys):
        document = self._prove(capsys, "--index", "0", "a", "b")
        document["root"] = "f" * 64
        _stdin(monkeypatch, json.dumps(document).encode())

        assert main(["verify-proof", "-"]) == EXIT_VERIFICATION_FAILED
        assert capsys.readouterr().out.strip() == "invalid"

    def test_verify_malformed_document(self, tmp_path, capsys):
        path = tmp_path / "proof.json"
        path.write_text('{"leaf": "abc"}')

        assert main(["verify-proof", str(path)]) == EXIT_RUNTIME_ERROR
        assert "MALFORMED_REQUEST" in capsys.readouterr().err

    def test_prove_index_out_of_range(self, capsys):
        assert main(["prove", "--index", "5", "a", "b"]) == EXIT_RUNTIME_ERROR
        assert capsys.readouterr().out == ""

    def test_prove_no_leaves(self, capsys):
        assert main(["prove", "--index", "0"]) == EXIT_RUNTIME_ERROR

    def test_prove_leaf_limit_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("AUTOTRACE_MAX_LEAVES", "1")

        assert main(["prove", "--index", "0", "a", "b"]) == EXIT_RUNTIME_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "RESOURCE_LIMIT_EXCEEDED" in captured.err

    def test_prove_payload_limit_from_config_file(self, tmp_path, capsys):
        (tmp_path / "autotrace.json").write_text(json.dumps({"limits": {"max_payload_bytes": 2}}))

        assert main(["prove", "--index", "0", "abc"]) == EXIT_RUNTIME_ERROR
        assert "RESOURCE_LIMIT_EXCEEDED" in capsys.readouterr().err

    def test_prove_within_limit(self, monkeypatch, capsys):
        monkeypatch.setenv("AUTOTRACE_MAX_LEAVES", "2")
        document = self._prove(capsys, "--index", "1", "a", "b")
        assert document["index"] == 1


class TestMainAndConfig:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "autotrace" in capsys.readouterr().out

    def test_config_init_and_show(self, tmp_path, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (tmp_path / "autotrace.json").exists()
        capsys.readouterr()

        assert main(["config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["limits"]["max_leaves"] is None

    def test_config_init_refuses_overwrite(self, tmp_path, capsys):
        (tmp_path / "autotrace.json").write_text("{}")
        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

    def test_bad_config_file(self, tmp_path, capsys):
        (tmp_path / "autotrace.json").write_text("not json")
        assert main(["hash", "abc"]) == EXIT_RUNTIME_ERROR
        assert "configuration" in capsys.readouterr().err
