import pytest

from pulsarlang.pipeline import (
    Backend,
    BackendBuilder,
    OutputFile,
    OutputKind,
    Target,
    Transform,
)


class RecordingTarget(Target):
    def __init__(self):
        self.calls = []

    def emit(self, comp, pool, output):
        self.calls.append((comp, pool, output))


class WritingTarget(Target):
    def emit(self, comp, pool, output):
        with output.open() as stream:
            stream.write(str(comp))


class Append(Transform):
    def __init__(self, suffix, log):
        self.suffix = suffix
        self.log = log

    def apply(self, comp, pool, gen):
        self.log.append((self.suffix, comp, gen))
        return comp + self.suffix


def test_emit_without_transforms_passes_component_through():
    target = RecordingTarget()
    backend = BackendBuilder().target(target).build()
    out = OutputFile.stdout()
    backend.emit("comp", "pool", "gen", out)
    assert target.calls == [("comp", "pool", out)]


def test_transforms_run_in_order():
    log = []
    target = RecordingTarget()
    backend = (
        BackendBuilder()
        .through(Append("_a", log))
        .through(Append("_b", log))
        .target(target)
        .build()
    )
    backend.emit("c", None, "g", OutputFile.stderr())
    assert log == [("_a", "c", "g"), ("_b", "c_a", "g")]
    assert target.calls[0][0] == "c_a_b"


def test_missing_target_raises():
    backend = BackendBuilder().build()
    with pytest.raises(RuntimeError):
        backend.emit("c", None, None, OutputFile.stdout())


def test_missing_target_still_runs_transforms_first():
    log = []
    backend = Backend(transforms=[Append("_x", log)])
    with pytest.raises(RuntimeError):
        backend.emit("c", None, None, OutputFile.stdout())
    assert len(log) == 1


def test_later_target_replaces_earlier():
    first, second = RecordingTarget(), RecordingTarget()
    backend = BackendBuilder().target(first).target(second).build()
    backend.emit("c", None, None, OutputFile.stdout())
    assert first.calls == []
    assert len(second.calls) == 1


def test_file_output_writes_file(tmp_path):
    path = tmp_path / "out.txt"
    backend = BackendBuilder().target(WritingTarget()).build()
    backend.emit("hello", None, None, OutputFile.file(path))
    assert path.read_text(encoding="utf-8") == "hello"


def test_stdout_output(capsys):
    backend = BackendBuilder().target(WritingTarget()).build()
    backend.emit("printed", None, None, OutputFile.stdout())
    assert capsys.readouterr().out == "printed"


def test_stderr_output(capsys):
    backend = BackendBuilder().target(WritingTarget()).build()
    backend.emit("warned", None, None, OutputFile.stderr())
    assert capsys.readouterr().err == "warned"


def test_output_file_kinds():
    assert OutputFile.file("x").kind is OutputKind.FILE
    assert OutputFile.stdout().path is None


def test_output_file_path_mismatch_raises():
    with pytest.raises(ValueError):
        OutputFile(OutputKind.FILE)
    with pytest.raises(ValueError):
        OutputFile(OutputKind.STDOUT, "x")


def test_abstract_classes_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Target()
    with pytest.raises(TypeError):
        Transform()