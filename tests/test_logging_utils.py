from pathlib import Path

from spectroview.analysis import Peak
from spectroview.logging_utils import JsonlLogger, log_records_jsonl, peak_record, read_jsonl


def test_jsonl_logger_appends_records(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "runs.jsonl"
    logger = JsonlLogger(path)
    logger.write({"step": 1})
    logger.write({"step": 2})
    assert read_jsonl(path) == [{"step": 1}, {"step": 2}]


def test_log_records_and_peak_record(tmp_path: Path) -> None:
    peaks = [Peak(frequency_hz=500.0, phase_rad=0.25, magnitude=128.0, bin=16)]
    record = peak_record("tone.wav", 256, "Hann", 8000, peaks)
    path = tmp_path / "peaks.jsonl"
    log_records_jsonl(path, [record, record])

    rows = read_jsonl(path)
    assert len(rows) == 2
    assert rows[0]["fft_size"] == 256
    assert rows[0]["sample_rate"] == 8000.0
    assert rows[0]["peaks"] == [
        {"bin": 16, "frequency_hz": 500.0, "phase_rad": 0.25, "magnitude": 128.0}
    ]
