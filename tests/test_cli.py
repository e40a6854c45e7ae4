import json
import logging

import pytest

import edit_config


def test_edits_are_applied_in_order(configs_dir, tmp_path, capsys):
    output = tmp_path / "node.conf"

    edit_config.main(
        [
            str(configs_dir / "example.conf"),
            "-o",
            str(output),
            "--set",
            "devMode",
            "false",
            "--section-set",
            "rpcSettings",
            "address",
            '"10.0.0.1:10003"',
            "--section-set",
            "rpcSettings.ssl",
            "keyStorePassword",
            "secret",
        ]
    )

    text = output.read_text()
    assert 'address="10.0.0.1:10003"' in text
    assert "devMode=false" in text
    assert text.endswith("\nssl {\n  keyStorePassword = secret\n}")
    assert "Wrote" in capsys.readouterr().out


def test_result_goes_to_stdout_without_output(configs_dir, capsys):
    edit_config.main(
        [str(configs_dir / "signer.conf"), "--section-set", "serviceLocations.identity-manager", "port", "6000"]
    )
    out = capsys.readouterr().out
    assert "        port =6000" in out
    assert out.startswith("// snippet from real signer.conf\n")


def test_no_add_missing_leaves_file_untouched(configs_dir, capsys):
    source = configs_dir / "example.conf"
    edit_config.main([str(source), "--no-add-missing", "--set", "unknown", "1", "--section-set", "nope", "k", "v"])
    assert capsys.readouterr().out == source.read_text()


def test_endpoints_are_printed_as_json(configs_dir, capsys):
    edit_config.main([str(configs_dir / "complex.conf"), "--endpoints"])
    payload = json.loads(capsys.readouterr().out)
    assert set(payload) == {"RPC", "P2P", "SSH"}
    assert payload["SSH"]["port"] == 10005
    assert payload["RPC"]["protocol"] == "RPC"


def test_unterminated_section_is_reported(tmp_path):
    source = tmp_path / "broken.conf"
    source.write_text("rpcSettings {\n  address = x\n")
    with pytest.raises(RuntimeError, match="Failed to parse"):
        edit_config.main([str(source), "--set", "a", "1"])


def test_verbose_enables_debug_logging(configs_dir, caplog):
    caplog.set_level(logging.DEBUG)
    edit_config.main([str(configs_dir / "example.conf"), "-v", "--set", "devMode", "false"])
    assert "Updated 1 occurrence(s) of root key 'devMode'" in caplog.text
