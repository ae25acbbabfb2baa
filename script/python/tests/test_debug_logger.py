import json
from dataclasses import dataclass

from bin2fpgadata.debug_logger import DebugLogger, create_logger


@dataclass
class Sample:
    burst_length: int = 16
    tcl: bool = False


def load_latest(log_dir):
    return json.loads((log_dir / "debug_bin2fpgadata_latest.json").read_text())


def test_disabled_logger_writes_nothing(tmp_path, monkeypatch):
    monkeypatch.delenv("BIN2FPGA_DEBUG", raising=False)
    logger = create_logger("bin2fpgadata", tmp_path / "logs", False)
    logger.section("Configuration")
    logger.param("burst_length", 16, "cli")
    assert logger.save() is None
    assert not (tmp_path / "logs").exists()


def test_env_enables_logger(tmp_path, monkeypatch):
    monkeypatch.setenv("BIN2FPGA_DEBUG", "1")
    assert create_logger("bin2fpgadata", tmp_path).enabled


def test_params_records_and_result(tmp_path):
    with DebugLogger("bin2fpgadata", tmp_path) as logger:
        logger.section("Configuration")
        logger.params(Sample(), source="default")
        logger.section("Conversion")
        logger.record("hole_skip", first=0x1000, end=0x1400, bursts=4)
        logger.note("done")
        logger.result(True, 0, "Conversion completed", details={"bursts_emitted": 3})

    text = (tmp_path / "debug_bin2fpgadata_latest.log").read_text()
    assert "[DEF ] burst_length" in text
    assert "<hole_skip> first=0x1000 end=0x1400 bursts=4" in text
    assert "SUCCESS - Conversion completed" in text

    data = load_latest(tmp_path)
    assert data["run"]["success"] is True
    assert data["run"]["details"] == {"bursts_emitted": 3}
    config, conversion = data["sections"]
    assert config["params"]["tcl"] == {"value": False, "source": "default"}
    assert conversion["records"] == [{"kind": "hole_skip", "first": 0x1000, "end": 0x1400, "bursts": 4}]
    assert conversion["events"] == [{"level": "note", "message": "done"}]


def test_file_record(tmp_path):
    target = tmp_path / "fw.bin"
    target.write_bytes(bytes(20))
    logger = DebugLogger("bin2fpgadata", tmp_path / "logs")
    logger.section("Files")
    logger.file("input", target)
    logger.file("output", tmp_path / "missing.txt")
    logger.save()

    records = load_latest(tmp_path / "logs")["sections"][0]["records"]
    assert records[0]["size"] == 20 and records[0]["exists"] is True
    assert records[1]["size"] is None and records[1]["exists"] is False


def test_exception_recorded_on_exit(tmp_path):
    try:
        with DebugLogger("bin2fpgadata", tmp_path) as logger:
            logger.section("Conversion")
            raise OSError("disk full")
    except OSError:
        pass

    events = load_latest(tmp_path)["sections"][0]["events"]
    assert events == [{"level": "error", "message": "Exception: OSError: disk full"}]
