"""Tests for the command-line interface."""

import json
import logging

import pytest

from nats_scaffold.cli import create_parser, main
from nats_scaffold.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestParser:
    def test_short_flags(self):
        args = create_parser().parse_args(["-p", "calc.proto", "-o", "out", "-f"])
        assert args.proto == "calc.proto"
        assert args.out == "out"
        assert args.force is True

    def test_defaults_leave_config_alone(self):
        args = create_parser().parse_args([])
        assert args.force is None
        assert args.dry_run is None
        assert args.out is None
        assert args.target == "typescript"


class TestMain:
    def test_generates_project(self, write_schema, out_dir, capsys):
        schema = write_schema()
        code = main(["--proto", str(schema), "--out", str(out_dir)])

        assert code == 0
        assert (out_dir / "calc_handlers.ts").exists()
        assert (out_dir / "calc.proto").exists()
        output = capsys.readouterr().out
        assert "1 service(s), 2 rpc(s)" in output
        assert "npm install" in output

    def test_missing_proto(self, out_dir, capsys):
        assert main(["--out", str(out_dir)]) == 1
        assert "--proto is required" in capsys.readouterr().out
        assert not out_dir.exists()

    def test_existing_output_without_force(self, write_schema, out_dir, capsys):
        schema = str(write_schema())
        assert main(["-p", schema, "-o", str(out_dir)]) == 0
        capsys.readouterr()

        assert main(["-p", schema, "-o", str(out_dir)]) == 1
        output = capsys.readouterr().out
        assert "already exists" in output
        assert "--force" in output

    def test_force_backs_up_handlers(self, write_schema, out_dir):
        schema = str(write_schema())
        assert main(["-p", schema, "-o", str(out_dir)]) == 0
        assert main(["-p", schema, "-o", str(out_dir), "--force"]) == 0
        assert (out_dir / "calc_handlers.bak").exists()

    def test_parse_error(self, write_schema, out_dir, capsys):
        schema = write_schema("message Only {}\n", name="broken.proto")
        assert main(["-p", str(schema), "-o", str(out_dir)]) == 1
        assert "failed to parse schema" in capsys.readouterr().out

    def test_schema_not_utf8(self, tmp_path, out_dir, capsys):
        schema = tmp_path / "bad.proto"
        schema.write_bytes(b"package \xff\xfe;\n")
        assert main(["-p", str(schema), "-o", str(out_dir)]) == 1
        output = capsys.readouterr().out
        assert "error while reading schema" in output
        assert "UTF-8" in output
        assert not out_dir.exists()

    def test_skipped_rpc_is_shown_before_parse_error(self, write_schema, out_dir, capsys):
        schema = write_schema(
            "service Feed {\n  rpc Watch(stream Query) returns (Event) {}\n}\n",
            name="feed.proto",
        )
        assert main(["-p", str(schema), "-o", str(out_dir)]) == 1
        captured = capsys.readouterr()
        assert "streaming" in captured.err
        assert "failed to parse schema" in captured.out

    def test_dry_run(self, write_schema, out_dir, capsys):
        assert main(["-p", str(write_schema()), "-o", str(out_dir), "--dry-run"]) == 0
        assert "nothing was written" in capsys.readouterr().out
        assert not out_dir.exists()

    def test_service_options(self, write_schema, out_dir):
        code = main(
            [
                "-p", str(write_schema()),
                "-o", str(out_dir),
                "--service-version", "3.0.0",
                "--timeout", "750",
                "--no-comments",
            ]
        )
        assert code == 0
        service = (out_dir / "calc_service.ts").read_text(encoding="utf-8")
        client = (out_dir / "calc_client.ts").read_text(encoding="utf-8")
        assert 'version: "3.0.0",' in service
        assert "To start the service" not in service
        assert "{ timeout: 750 }," in client

    def test_config_file(self, write_schema, out_dir, tmp_path):
        config = tmp_path / "scaffold.json"
        config.write_text(
            json.dumps({"output_dir": str(out_dir), "package_name": "calc-service"}),
            encoding="utf-8",
        )
        assert main(["-p", str(write_schema()), "--config", str(config)]) == 0
        manifest = json.loads((out_dir / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "calc-service"

    def test_invalid_error_code(self, write_schema, out_dir, capsys):
        code = main(["-p", str(write_schema()), "-o", str(out_dir), "--error-code", "7"])
        assert code == 1
        assert "Invalid error_code" in capsys.readouterr().out

    def test_list_targets(self, capsys):
        assert main(["--list-targets"]) == 0
        assert "typescript" in capsys.readouterr().out

    def test_log_file(self, write_schema, out_dir, tmp_path):
        log_file = tmp_path / "scaffold.log"
        code = main(
            ["-p", str(write_schema()), "-o", str(out_dir), "--log-file", str(log_file)]
        )
        assert code == 0
        assert "Parsed calc.proto" in log_file.read_text(encoding="utf-8")
