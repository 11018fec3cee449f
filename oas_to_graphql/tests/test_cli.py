from pathlib import Path

from click.testing import CliRunner

from oas_to_graphql.oas_to_graphql import oas_to_graphql

TEST_DATA = Path(__file__).parent / "test_data"

# Path decisions for /drawings/{id} and /cats, then Kitten: subset of five fields
SESSION = "y\ny\ns\ny\nn\ny\nn\ny\n"


class TestCli:
    """Test the command line"""

    def test_skip_writes_sdl_to_stdout(self):
        result = CliRunner().invoke(oas_to_graphql, ["-i", "skip", str(TEST_DATA / "petstore.yaml")])
        assert result.exit_code == 0, result.output
        assert "type Pet {\n  name: String!\n  id: Int = 0\n}" in result.output

    def test_record_then_replay_is_identical(self, tmp_path):
        source = str(TEST_DATA / "composed.yaml")
        recording = tmp_path / "session.txt"
        recorded_out = tmp_path / "recorded.graphql"
        replayed_out = tmp_path / "replayed.graphql"

        runner = CliRunner()
        result = runner.invoke(
            oas_to_graphql,
            ["-m", "select", "-i", "record", "--save-recording", str(recording), "-o", str(recorded_out), source],
            input=SESSION,
        )
        assert result.exit_code == 0, result.output
        assert recording.read_text() == SESSION

        result = runner.invoke(oas_to_graphql, ["-m", "select", "-r", str(recording), "-o", str(replayed_out), source])
        assert result.exit_code == 0, result.output

        assert recorded_out.read_bytes() == replayed_out.read_bytes()
        assert recorded_out.read_text().endswith("listCats {\n name\n tag\n age\n}\n")

    def test_recording_takes_precedence_over_input_type(self, tmp_path):
        recording = tmp_path / "answers.txt"
        recording.write_text("n\nn\n")
        out = tmp_path / "out.graphql"

        result = CliRunner().invoke(oas_to_graphql, ["-m", "select", "-i", "prompt", "-r", str(recording), "-o", str(out), str(TEST_DATA / "composed.yaml")])
        assert result.exit_code == 0, result.output
        assert out.read_text() == ""

    def test_existing_output_is_replaced(self, tmp_path):
        out = tmp_path / "schema.graphql"
        out.write_text("stale")
        result = CliRunner().invoke(oas_to_graphql, ["-i", "skip", "-o", str(out), str(TEST_DATA / "swagger.json")])
        assert result.exit_code == 0, result.output
        assert "type User {" in out.read_text()
        assert "stale" not in out.read_text()

    def test_empty_recording_fails(self, tmp_path):
        recording = tmp_path / "empty.txt"
        recording.write_text("")
        result = CliRunner().invoke(oas_to_graphql, ["-r", str(recording), str(TEST_DATA / "petstore.yaml")])
        assert result.exit_code == 1
        assert "empty" in result.output

    def test_exhausted_recording_fails(self, tmp_path):
        recording = tmp_path / "short.txt"
        recording.write_text("y\n")
        result = CliRunner().invoke(oas_to_graphql, ["-m", "select", "-r", str(recording), str(TEST_DATA / "composed.yaml")])
        assert result.exit_code == 1
        assert "Recording exhausted" in result.output

    def test_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text('{"add_generation_comment": false, "query_type_name": "Root"}')
        result = CliRunner().invoke(oas_to_graphql, ["-i", "skip", "-c", str(config), str(TEST_DATA / "petstore.yaml")])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("type Pet {")
        assert "type Root {" in result.output
