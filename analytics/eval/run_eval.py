"""
Evaluation harness -- runs eval_questions.jsonl through the copilot
and generates analytics/reports/eval_report.md.

Checks:
  - Operation correctness (parsed operation matches expected)
  - Filter correctness    (region list and product match expected)
  - Match count           (rows passing the filters on the seeded dataset)
  - Latency               (end-to-end ms)

Run:  python -m analytics.eval.run_eval
"""
from __future__ import annotations

import json
import sys
import datetime
from pathlib import Path
from typing import Any

EVAL_PATH = Path(__file__).resolve().parent / "eval_questions.jsonl"
REPORT_PATH = Path(__file__).resolve().parents[1] / "reports" / "eval_report.md"


def load_questions(path: Path = EVAL_PATH) -> list[dict[str, Any]]:
    lines = path.read_text().splitlines()
    return [json.loads(line) for line in lines if line.strip()]


def _run_one(q: dict[str, Any]) -> dict[str, Any]:
    """Run a single question through the copilot pipeline."""
    from src.copilot.service import run_natural_language_query

    question = q["question"]
    try:
        result = run_natural_language_query(question)
    except Exception as exc:
        return {
            "question": question,
            "error": str(exc),
            "latency_ms": 0,
            "operation_ok": False,
            "filters_ok": False,
            "count_ok": False,
            "pseudo_sql": "",
            "success": False,
        }

    operation_ok = result.intent.operation.value == q.get("expected_operation", "SELECT")

    expected_filters = q.get("expected_filters", {})
    actual_filters = result.intent.filters.model_dump(exclude_none=True)
    filters_ok = actual_filters == expected_filters

    expected_count = q.get("expected_matched_count")
    count_ok = expected_count is None or result.matched_count == expected_count

    return {
        "question": question,
        "error": None,
        "latency_ms": result.latency_ms,
        "operation_ok": operation_ok,
        "filters_ok": filters_ok,
        "count_ok": count_ok,
        "matched_count": result.matched_count,
        "pseudo_sql": result.rendered_query,
        "success": operation_ok and filters_ok and count_ok,
    }


def evaluate(questions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Run every question and return one result dict per question."""
    return [_run_one(q) for q in questions]


def _pct(part: int, whole: int) -> float:
    return (part / whole * 100) if whole else 0


def generate_report(results: list[dict[str, Any]]) -> str:
    """Generate the Markdown eval report."""
    total = len(results)
    now = datetime.datetime.now().strftime("%Y-%m-%d %H:%M")

    successes = sum(1 for r in results if r["success"])
    op_correct = sum(1 for r in results if r["operation_ok"])
    filt_correct = sum(1 for r in results if r["filters_ok"])
    count_correct = sum(1 for r in results if r["count_ok"])

    latencies = sorted(r["latency_ms"] for r in results)
    avg_lat = sum(latencies) / len(latencies) if latencies else 0
    max_lat = latencies[-1] if latencies else 0

    lines: list[str] = []
    lines.append("# Evaluation Report")
    lines.append("")
    lines.append(f"> Generated: {now}  |  Questions: **{total}**")
    lines.append("")
    lines.append("## Summary")
    lines.append("")
    lines.append("| Check | Value |")
    lines.append("|-------|-------|")
    lines.append(f"| Overall accuracy | **{_pct(successes, total):.0f}%** ({successes}/{total}) |")
    lines.append(f"| Operation correctness | **{_pct(op_correct, total):.0f}%** ({op_correct}/{total}) |")
    lines.append(f"| Filter correctness | **{_pct(filt_correct, total):.0f}%** ({filt_correct}/{total}) |")
    lines.append(f"| Match count correctness | **{_pct(count_correct, total):.0f}%** ({count_correct}/{total}) |")
    lines.append(f"| Mean latency | {avg_lat:.0f} ms (max {max_lat} ms) |")
    lines.append("")
    lines.append("## Per-Question Results")
    lines.append("")
    lines.append("| # | Question | Op | Filters | Count | Pseudo-SQL | Pass |")
    lines.append("|---|----------|----|---------|-------|------------|------|")

    for i, r in enumerate(results, 1):
        op = "OK" if r["operation_ok"] else "ERROR"
        f = "OK" if r["filters_ok"] else "ERROR"
        c = "OK" if r["count_ok"] else "ERROR"
        p = "OK" if r["success"] else "ERROR"
        qtext = r["question"][:55] + ("..." if len(r["question"]) > 55 else "")
        lines.append(f"| {i} | {qtext} | {op} | {f} | {c} | `{r['pseudo_sql']}` | {p} |")

    lines.append("")
    failures = [r for r in results if not r["success"]]
    lines.append("## Failures")
    lines.append("")
    if not failures:
        lines.append("None -- all questions handled correctly.")
    for r in failures:
        lines.append(f"- {r['question']}" + (f" (error: `{r['error']}`)" if r.get("error") else ""))
    lines.append("")

    return "\n".join(lines)


def run():
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")  # type: ignore[attr-defined]

    questions = load_questions()
    print(f"Loaded {len(questions)} eval questions.")

    results = evaluate(questions)
    for i, r in enumerate(results, 1):
        status = "PASS" if r["success"] else "FAIL"
        print(f"  [{i:2d}/{len(results)}] {status}  {r['question'][:60]:<60}  {r['latency_ms']:>4d}ms")

    REPORT_PATH.parent.mkdir(parents=True, exist_ok=True)
    REPORT_PATH.write_text(generate_report(results), encoding="utf-8")
    print(f"\nReport written to {REPORT_PATH}")

    total = len(results)
    successes = sum(1 for r in results if r["success"])
    print(f"\n{'='*50}")
    print(f"  Accuracy: {successes}/{total} ({_pct(successes, total):.0f}%)")
    print(f"{'='*50}")


if __name__ == "__main__":
    run()
