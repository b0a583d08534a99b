import json
from pathlib import Path

from click.testing import CliRunner

from api2swagger.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


def _read(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class TestCliSwagger:
    def test_writes_default_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "swagger", str(FIXTURES / "user_api.yaml"),
            "--host", "api.example.com",
            "--basepath", "/api",
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        output = tmp_path / "rest.swagger.json"
        assert output.exists()
        assert "Swagger document saved to" in result.output
        data = _read(output)
        assert data["host"] == "api.example.com"
        assert data["basePath"] == "/api"
        assert "/v1/users/{id}" in data["paths"]

    def test_custom_filename_and_schemes(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "swagger", str(FIXTURES / "user_api.yaml"),
            "--filename", "user.json",
            "--schemes", "https,wss",
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        assert _read(tmp_path / "user.json")["schemes"] == ["https", "wss"]

    def test_bad_scheme_writes_nothing(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "swagger", str(FIXTURES / "user_api.yaml"),
            "--schemes", "ftp",
            "-o", str(tmp_path),
        ])

        assert result.exit_code != 0
        assert "unsupported scheme" in result.output
        assert not (tmp_path / "rest.swagger.json").exists()

    def test_malformed_response_writes_nothing(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "swagger", str(FIXTURES / "user_api.yaml"),
            "--pack", "Response",
            "--response", '[{"name":"code","type":"integer"}]',
            "-o", str(tmp_path),
        ])

        assert result.exit_code != 0
        assert not (tmp_path / "rest.swagger.json").exists()

    def test_pack_wraps_responses(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "swagger", str(FIXTURES / "user_api.yaml"),
            "--pack", "Response",
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        data = _read(tmp_path / "rest.swagger.json")
        assert "Response" in data["definitions"]
        schema = data["paths"]["/login"]["post"]["responses"]["200"]["schema"]
        assert schema["allOf"][0] == {"$ref": "#/definitions/Response"}

    def test_reads_stdin(self, tmp_path):
        text = (FIXTURES / "user_api.yaml").read_text(encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["swagger", "-", "-o", str(tmp_path)], input=text)

        assert result.exit_code == 0, result.output
        assert _read(tmp_path / "rest.swagger.json")["info"]["title"] == "User API"

    def test_plugin_envelope_style(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["swagger", str(FIXTURES / "plugin.json"), "-o", str(tmp_path)])

        assert result.exit_code == 0, result.output
        op = _read(tmp_path / "rest.swagger.json")["paths"]["/orders/{orderId}/attachments"]["post"]
        assert op["tags"] == ["order_service/orders"]

    def test_style_option_overrides_envelope(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "swagger", str(FIXTURES / "plugin.json"),
            "--style", "GoZero",
            "-o", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        op = _read(tmp_path / "rest.swagger.json")["paths"]["/orders/{orderId}/attachments"]["post"]
        assert op["tags"] == ["OrderService/orders"]

    def test_unparsable_spec(self, tmp_path):
        spec = tmp_path / "broken.yaml"
        spec.write_text("- just\n- a list\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["swagger", str(spec), "-o", str(tmp_path / "out")])

        assert result.exit_code != 0
        assert "must be a mapping" in result.output
        assert not (tmp_path / "out").exists()

    def test_missing_spec_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["swagger", str(tmp_path / "nope.yaml")])
        assert result.exit_code != 0

    def test_envvar_option(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["swagger", str(FIXTURES / "user_api.yaml"), "-o", str(tmp_path)],
            env={"API2SWAGGER_SWAGGER_HOST": "env.example.com"},
        )

        assert result.exit_code == 0, result.output
        assert _read(tmp_path / "rest.swagger.json")["host"] == "env.example.com"
