from __future__ import annotations

import json
from pathlib import Path

import typer.testing

from abi_bindgen.cli import app, main
from abi_bindgen.version import __version__

from conftest import ABIS_DIR, EXPECTED_DIR, fn, param

runner = typer.testing.CliRunner()


class TestCLIBasics:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for cmd in ("generate", "batch", "selector", "inspect", "version"):
            assert cmd in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"abi-bindgen {__version__}"

    def test_selector(self) -> None:
        result = runner.invoke(app, ["selector", "transfer(address,uint256)"])
        assert result.exit_code == 0
        assert result.output.strip() == "0xa9059cbb"

    def test_bad_log_level(self) -> None:
        result = runner.invoke(app, ["--log-level", "LOUD", "version"])
        assert result.exit_code != 0


class TestGenerate:
    def test_writes_module(self, tmp_path: Path) -> None:
        out = tmp_path / "erc20.py"
        result = runner.invoke(app, ["generate", "-i", str(ABIS_DIR / "erc20.json"), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "(3 bindings)" in result.output
        assert out.read_text() == (EXPECTED_DIR / "erc20.py").read_text()

    def test_name_option(self, tmp_path: Path) -> None:
        out = tmp_path / "t.py"
        result = runner.invoke(
            app, ["generate", "--input", str(ABIS_DIR / "erc20.json"), "--output", str(out), "--name", "Token"]
        )
        assert result.exit_code == 0
        assert "deployed Token contract" in out.read_text()

    def test_error_exits_nonzero_and_writes_nothing(self, tmp_path: Path) -> None:
        src = tmp_path / "bad.json"
        src.write_text(json.dumps([fn("mint", [param("uint7", "amount")])]))
        out = tmp_path / "bad.py"
        result = runner.invoke(app, ["generate", "-i", str(src), "-o", str(out)])
        assert result.exit_code == 1
        assert "error: UnknownTypeError [entry=mint, param=inputs[0]]" in result.output
        assert not out.exists()

    def test_missing_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["generate", "-i", str(tmp_path / "nope.json"), "-o", str(tmp_path / "x.py")])
        assert result.exit_code != 0

    def test_name_that_breaks_docstring(self, tmp_path: Path) -> None:
        out = tmp_path / "t.py"
        result = runner.invoke(
            app, ["generate", "-i", str(ABIS_DIR / "erc20.json"), "-o", str(out), "--name", 'T"""']
        )
        assert result.exit_code == 1
        assert "error: InvalidLabelError" in result.output
        assert not out.exists()


class TestBatch:
    def test_batch(self, tmp_path: Path) -> None:
        inputs = [str(ABIS_DIR / f"{n}.json") for n in ("erc20", "erc721", "erc1155")]
        result = runner.invoke(app, ["batch", *inputs, "--out-dir", str(tmp_path), "--workers", "3"])
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in tmp_path.iterdir()) == ["erc1155.py", "erc20.py", "erc721.py"]
        assert (tmp_path / "erc721.py").read_text() == (EXPECTED_DIR / "erc721.py").read_text()

    def test_batch_partial_failure(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([fn("x", [param("fixed", "r")], [])]))
        out = tmp_path / "out"
        result = runner.invoke(app, ["batch", str(ABIS_DIR / "ierc165.json"), str(bad), "--out-dir", str(out)])
        assert result.exit_code == 1
        assert "error: bad.json: UnsupportedTypeError" in result.output
        assert (out / "ierc165.py").exists()
        assert not (out / "bad.py").exists()

    def test_batch_non_utf8_input(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_bytes(b'[{"type":"function","name":"\xff"}]')
        out = tmp_path / "out"
        result = runner.invoke(app, ["batch", str(ABIS_DIR / "ierc165.json"), str(bad), "--out-dir", str(out)])
        assert result.exit_code == 1
        assert "error: bad.json: AbiParseError" in result.output
        assert "wrote" in result.output
        assert (out / "ierc165.py").exists()

    def test_batch_duplicate_outputs_is_usage_error(self, tmp_path: Path) -> None:
        a = tmp_path / "a" / "erc20.json"
        a.parent.mkdir()
        a.write_text((ABIS_DIR / "erc20.json").read_text())
        result = runner.invoke(app, ["batch", str(a), str(ABIS_DIR / "erc20.json"), "--out-dir", str(tmp_path)])
        assert result.exit_code == 2
        assert not (tmp_path / "erc20.py").exists()


class TestInspect:
    def test_table(self) -> None:
        result = runner.invoke(app, ["inspect", "-i", str(ABIS_DIR / "erc721.json")])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 9
        assert lines[0] == "balance_of__0x70a08231  balanceOf(address)  view"

    def test_json(self) -> None:
        result = runner.invoke(app, ["inspect", "-i", str(ABIS_DIR / "ierc165.json"), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {
                "identifier": "supports_interface__0x01ffc9a7",
                "signature": "supportsInterface(bytes4)",
                "selector": "0x01ffc9a7",
                "stateMutability": "view",
            }
        ]


def test_main_returns_exit_code(tmp_path: Path, capsys) -> None:
    assert main(["selector", "balanceOf(address)"]) == 0
    assert capsys.readouterr().out.strip() == "0x70a08231"
    assert main(["generate", "-i", str(tmp_path / "missing.json"), "-o", str(tmp_path / "o.py")]) == 2
