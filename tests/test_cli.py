import json

import pytest

from sms_sieve import __version__
from sms_sieve.cli import main
from sms_sieve.config import Config


class TestSweepCommand:
    def test_sweep_and_save(self, corpus_file, temp_dir, capsys):
        model_path = temp_dir / "model.json"
        code = main([
            "sweep", str(corpus_file),
            "--alphas", "0.1", "0", "1.0",
            "--workers", "2",
            "--save", str(model_path),
        ])
        out = capsys.readouterr().out

        assert code == 0
        assert "Validation accuracy" in out
        assert "failed:" in out
        assert "accuracy:" in out
        assert model_path.exists()

    def test_corpus_from_config(self, corpus_file, capsys):
        config = Config()
        config.corpus.path = str(corpus_file)
        config.model.alpha_candidates = [1.0]
        config.save()

        assert main(["sweep"]) == 0
        assert "Test set, alpha=1.0" in capsys.readouterr().out

    def test_no_corpus(self):
        assert main(["sweep"]) == 1

    def test_missing_corpus(self, temp_dir):
        assert main(["sweep", str(temp_dir / "missing.tsv")]) == 1

    def test_every_candidate_failed(self, corpus_file):
        assert main(["sweep", str(corpus_file), "--alphas", "0", "-1"]) == 1


class TestClassifyCommand:
    def test_classify_saved_model(self, corpus_file, temp_dir, capsys):
        model_path = temp_dir / "model.json"
        assert main(["sweep", str(corpus_file), "--save", str(model_path)]) == 0
        capsys.readouterr()

        code = main([
            "classify", "--model", str(model_path), "--alpha", "1.0",
            "WIN cash now, claim your prize!!!",
            "see you at lunch, mum",
        ])
        lines = capsys.readouterr().out.splitlines()

        assert code == 0
        assert lines[0].startswith("spam\t")
        assert lines[1].startswith("ham\t")

    def test_default_model_path(self, corpus_file, capsys):
        assert main(["sweep", str(corpus_file), "--save", str(Config.model_path())]) == 0
        capsys.readouterr()

        assert main(["classify", "free prize"]) == 0
        assert capsys.readouterr().out.startswith("spam\t")

    def test_missing_model(self, temp_dir):
        assert main(["classify", "--model", str(temp_dir / "nope.json"), "hello"]) == 1

    def test_model_not_utf8(self, temp_dir):
        model_path = temp_dir / "model.json"
        model_path.write_bytes(b"\xff\xfe\x00\x01")
        assert main(["classify", "--model", str(model_path), "hello"]) == 1

    def test_model_with_negative_counts(self, corpus_file, temp_dir):
        model_path = temp_dir / "model.json"
        assert main(["sweep", str(corpus_file), "--save", str(model_path)]) == 0
        data = json.loads(model_path.read_text())
        data["counts"]["spam"][0] = -5
        model_path.write_text(json.dumps(data))

        assert main(["classify", "--model", str(model_path), "hello"]) == 1

    def test_invalid_alpha(self, corpus_file, temp_dir):
        model_path = temp_dir / "model.json"
        assert main(["sweep", str(corpus_file), "--save", str(model_path)]) == 0
        assert main(["classify", "--model", str(model_path), "--alpha", "0", "hello"]) == 1


class TestGlobalOptions:
    def test_paths(self, capsys):
        assert main(["--paths"]) == 0
        assert "model.json" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command(self):
        assert main([]) == 2

    def test_missing_config_file(self, temp_dir):
        assert main(["--config", str(temp_dir / "nope.toml"), "sweep"]) == 1
