"""
Tests for the command line interface.
"""

import json

import pytest

from legal_expand.__main__ import main, parse_resolutions


class TestParseResolutions:
    """--resolve SIGLA=MEANING parsing."""

    def test_valid(self):
        assert parse_resolutions(["CE=Comunidad Europea", " DGT = Dirección General de Tráfico "]) == {
            "CE": "Comunidad Europea",
            "DGT": "Dirección General de Tráfico",
        }

    @pytest.mark.parametrize("value", ["CE", "=Comunidad", "CE="])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_resolutions([value])


class TestExpandCommand:
    """python -m legal_expand expand"""

    def test_plain(self, capsys):
        assert main(["expand", "La AEAT publica en el BOE"]) == 0
        out = capsys.readouterr().out
        assert "AEAT (Agencia Estatal de Administración Tributaria)" in out
        assert "BOE (Boletín Oficial del Estado)" in out

    def test_structured(self, capsys):
        assert main(["expand", "AEAT y IVA", "--format", "structured"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["stats"]["total_expanded"] == 2

    def test_resolve(self, capsys):
        assert main(["expand", "según la CE", "--resolve", "CE=Comunidad Europea"]) == 0
        assert "CE (Comunidad Europea)" in capsys.readouterr().out

    def test_diagnostics(self, capsys):
        assert main(["expand", "AEAT y AEAT", "--only-first", "--diagnostics"]) == 0
        assert "expand-only-first" in capsys.readouterr().out

    def test_unknown_format(self, capsys):
        assert main(["expand", "AEAT", "--format", "bogus"]) == 2
        assert "Unknown format" in capsys.readouterr().err

    def test_bad_resolution(self):
        assert main(["expand", "CE", "--resolve", "CE"]) == 2


class TestQueryCommands:
    """lookup / list / stats"""

    def test_lookup(self, capsys):
        assert main(["lookup", "CE"]) == 0
        out = capsys.readouterr().out
        assert "Constitución Española" in out
        assert "Comunidad Europea" in out

    def test_lookup_json(self, capsys):
        assert main(["lookup", "BOE", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "acronym": "BOE",
            "meanings": ["Boletín Oficial del Estado"],
            "has_duplicates": False,
        }

    def test_lookup_missing(self):
        assert main(["lookup", "NOEXISTE"]) == 1

    def test_list(self, capsys):
        assert main(["list"]) == 0
        assert "AEAT" in capsys.readouterr().out.splitlines()

    def test_stats(self, capsys):
        assert main(["stats"]) == 0
        assert "With multiple meanings: 8" in capsys.readouterr().out


class TestDataCommands:
    """build-data / validate / export"""

    @pytest.fixture
    def source_csv(self, tmp_path):
        path = tmp_path / "siglas.csv"
        path.write_text(
            "SIGLAS,SIGNIFICADO\nBOE,Boletín Oficial del Estado\nCE,Constitución Española\n"
            "CE,Comunidad Europea\n",
            encoding="utf-8",
        )
        return path

    def test_build_validate_and_use(self, source_csv, tmp_path, capsys):
        output = tmp_path / "dictionary.json"
        assert main(["build-data", "--csv", str(source_csv), "--output", str(output)]) == 0
        assert output.exists()

        assert main(["validate", "--dictionary", str(output)]) == 0
        assert "Valid: True" in capsys.readouterr().out

        assert main(["lookup", "BOE", "--dictionary", str(output)]) == 0
        assert main(["lookup", "AEAT", "--dictionary", str(output)]) == 1

    def test_validate_invalid(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"entries": []}), encoding="utf-8")
        assert main(["validate", "--dictionary", str(path)]) == 1
        assert "Dictionary has no entries" in capsys.readouterr().out

    def test_malformed_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert main(["lookup", "BOE", "--dictionary", str(path)]) == 1
        assert "Invalid dictionary" in capsys.readouterr().err

    def test_export_txt(self, source_csv, tmp_path):
        output = tmp_path / "siglas.txt"
        assert main(["export", "--dictionary", str(source_csv), "--output", str(output)]) == 0
        assert "CE * → Constitución Española" in output.read_text(encoding="utf-8")

    def test_missing_command(self):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2
