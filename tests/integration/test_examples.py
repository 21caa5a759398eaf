"""
Smoke tests for the runnable examples.
"""
# 说明：examples/ 下示例脚本的冒烟测试
# 覆盖：
# - 各示例在 --quick 模式下可运行并写出 JSON 结果
# - 示例输出中的关键指标符合预期（无效编码器被识别、热门值的估计信号高于背景）
from __future__ import annotations

import importlib.util
import json
import logging
from pathlib import Path

import pytest

_EXAMPLES = Path(__file__).resolve().parents[2] / "examples"


def _load(relative: str):
    # 示例文件名以数字开头，需按路径加载模块
    path = _EXAMPLES / relative
    spec = importlib.util.spec_from_file_location(path.stem.replace("-", "_"), path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def restore_library_log_level():
    # 模拟示例会调高 rapporlib logger 的级别，测试结束后恢复
    logger = logging.getLogger("rapporlib")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.mark.parametrize("variant", ["rolling", "digest", "cohort"])
def test_encode_stages_example(tmp_path, variant) -> None:
    # 验证阶段展示示例运行成功，且 10 位编码器被标记为无效
    result = _load("basic/00_encode_stages.py").main(
        ["--quick", "--outdir", str(tmp_path), "--variant", variant]
    )
    assert result["metrics"]["broken_is_valid"] is False
    assert "broken-metric" in result["metrics"]["broken_error"]
    assert len(result["outputs"]["stages"]["x"]["bytes"]) == 2 * result["metrics"]["num_bytes"]
    assert json.loads(Path(result["artifacts"]["json"]).read_text(encoding="utf-8"))["name"] == result["name"]


def test_simulate_clients_example(tmp_path, restore_library_log_level) -> None:
    # 验证模拟示例中热门值比特的估计计数明显高于其他比特
    result = _load("client/10_simulate_clients.py").main(["--quick", "--outdir", str(tmp_path)])
    metrics = result["metrics"]
    assert metrics["average_signal"] > metrics["average_other"] + 0.2 * metrics["popular_clients"]
    lines = Path(result["artifacts"]["reports"]).read_text(encoding="utf-8").splitlines()
    assert len(lines) == 100
    assert json.loads(lines[0])["payload"]["user_id"] == "***"
