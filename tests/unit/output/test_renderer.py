import io
import json

import pytest

from imgx.entities.fragment import (
    Code,
    ExecutionResult,
    Image,
    Narration,
    Reasoning,
    ResponseFragment,
)
from imgx.entities.options import ImgxOptions
from imgx.output.renderer import (
    IMAGE_NOTICE,
    RESULT_BANNER,
    THINKING_BANNER,
    OutputMode,
    format_verbose,
    render,
    select_output_mode,
)


class RecordingStream(io.StringIO):
    """StringIO that also remembers each individual write."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[str] = []

    def write(self, s: str) -> int:
        self.events.append(s)
        return super().write(s)


@pytest.fixture
def fragments() -> list[ResponseFragment]:
    return [
        Reasoning(content="thinking about it"),
        Narration(content="The answer is 42."),
        Code(content="print(6 * 7)"),
        ExecutionResult(content="42"),
        Image(mime_type="image/png", data="iVBORw0K"),
    ]


@pytest.fixture
def stream() -> RecordingStream:
    return RecordingStream()


@pytest.mark.unit
class TestSelectOutputMode:
    def test_default(self) -> None:
        assert select_output_mode(ImgxOptions()) is OutputMode.DEFAULT

    def test_json_beats_everything(self) -> None:
        options = ImgxOptions(json=True, quiet=True, code=True, verbose=True)
        assert select_output_mode(options) is OutputMode.JSON

    def test_quiet_beats_code_and_verbose(self) -> None:
        options = ImgxOptions(quiet=True, code=True, verbose=True)
        assert select_output_mode(options) is OutputMode.QUIET

    def test_code_beats_verbose(self) -> None:
        assert select_output_mode(ImgxOptions(code=True, verbose=True)) is OutputMode.CODE

    def test_verbose(self) -> None:
        assert select_output_mode(ImgxOptions(verbose=True)) is OutputMode.VERBOSE


@pytest.mark.unit
class TestRender:
    def test_default_emits_only_narration(
        self, fragments: list[ResponseFragment], stream: RecordingStream
    ) -> None:
        render(fragments, OutputMode.DEFAULT, stream)

        assert stream.getvalue() == "The answer is 42.\n"
        assert len(stream.events) == 1

    def test_quiet_writes_nothing(
        self, fragments: list[ResponseFragment], stream: RecordingStream
    ) -> None:
        render(fragments, OutputMode.QUIET, stream)

        assert stream.events == []

    def test_code_only(self, stream: RecordingStream) -> None:
        render(
            [Code(content="a = 1"), Narration(content="x"), Code(content="b = 2")],
            OutputMode.CODE,
            stream,
        )

        assert stream.events == ["a = 1\n", "b = 2\n"]

    def test_verbose_emits_one_event_per_fragment(
        self, fragments: list[ResponseFragment], stream: RecordingStream
    ) -> None:
        render(fragments, OutputMode.VERBOSE, stream)

        assert len(stream.events) == 5
        thinking, narration, code, result, image = stream.events
        assert thinking == f"\n{THINKING_BANNER}\nthinking about it\n"
        assert narration == "The answer is 42.\n"
        assert code == "\n```python\nprint(6 * 7)\n```\n"
        assert result == f"\n{RESULT_BANNER}\n42\n"
        assert image == f"{IMAGE_NOTICE}\n"
        assert "iVBORw0K" not in stream.getvalue()

    def test_json_serialises_every_fragment(
        self, fragments: list[ResponseFragment], stream: RecordingStream
    ) -> None:
        render(fragments, OutputMode.JSON, stream)

        assert len(stream.events) == 1
        document = json.loads(stream.getvalue())
        assert [item["type"] for item in document] == [
            "thought",
            "text",
            "code",
            "result",
            "image",
        ]
        assert document[4] == {
            "type": "image",
            "content": "",
            "mimeType": "image/png",
            "data": "iVBORw0K",
        }
        assert document[3] == {"type": "result", "content": "42"}

    def test_json_of_empty_sequence(self, stream: RecordingStream) -> None:
        render([], OutputMode.JSON, stream)

        assert json.loads(stream.getvalue()) == []

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        render([Narration(content="hello")], OutputMode.DEFAULT)

        assert capsys.readouterr().out == "hello\n"

    def test_unknown_fragment_type_is_rejected(self) -> None:
        with pytest.raises(TypeError):
            format_verbose("not a fragment")  # type: ignore[arg-type]
