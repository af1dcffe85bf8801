"""Fixed sample artifacts for working on the dashboard without the RS extracts."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from review_core.data import (
    CATEGORY_CONTINUING,
    CATEGORY_ENDING,
    CATEGORY_NEW,
    INDICATOR_KINDS,
    VERDICT_ABOLISHED,
    VERDICT_AS_IS,
    VERDICT_FUNDAMENTAL,
    VERDICT_PARTIAL,
    VERDICT_SCHEDULED_END,
    VERDICTS,
    format_amount,
    percentage,
    round_half_up,
)
from review_core.writer import write_artifacts

TOTAL_PROJECTS = 5948

MINISTRY_COUNTS: List[Tuple[str, int]] = [
    ("文部科学省", 1245),
    ("厚生労働省", 987),
    ("経済産業省", 743),
    ("農林水産省", 632),
    ("国土交通省", 578),
    ("総務省", 432),
    ("環境省", 345),
    ("内閣府", 256),
    ("財務省", 234),
    ("外務省", 198),
    ("防衛省", 156),
    ("法務省", 142),
]

PROJECT_CATEGORY_COUNTS: List[Tuple[str, int]] = [
    (CATEGORY_CONTINUING, 5538),
    (CATEGORY_NEW, 289),
    (CATEGORY_ENDING, 121),
]

EXPENSE_COUNTS: List[Tuple[str, int]] = [
    ("その他の事項経費", 2345),
    ("科学技術振興費", 1123),
    ("社会保障費", 865),
    ("公共事業関係費", 587),
    ("経済安全保障推進費", 354),
    ("地方財政対策費", 234),
    ("防衛関係費", 156),
    ("食料安全保障関係費", 132),
    ("中小企業対策費", 98),
    ("教育振興助成費", 54),
]

INDICATOR_COUNTS = {INDICATOR_KINDS[0]: 18976, INDICATOR_KINDS[1]: 24567, INDICATOR_KINDS[2]: 12587}

PROJECT_PERFORMANCE: List[Tuple[str, float, str, str]] = [
    ("3245", 132.5, "国際的な人材育成プログラム", "文部科学省"),
    ("1872", 124.3, "デジタル技術による地域活性化支援事業", "総務省"),
    ("4567", 115.8, "先端医療技術研究開発プロジェクト", "厚生労働省"),
    ("2345", 112.4, "次世代エネルギー技術開発事業", "経済産業省"),
    ("5678", 107.6, "食品安全高度化プログラム", "農林水産省"),
    ("987", 45.2, "地域文化発信支援事業", "文部科学省"),
    ("654", 42.8, "後進地域交通インフラ整備事業", "国土交通省"),
    ("543", 38.5, "小規模事業者販路開拓支援", "経済産業省"),
    ("432", 31.7, "高齢者デジタル活用支援事業", "厚生労働省"),
    ("321", 25.9, "遊休農地活用推進事業", "農林水産省"),
]

VERDICT_COUNTS: List[Tuple[str, int]] = [
    (VERDICT_PARTIAL, 2254),
    (VERDICT_AS_IS, 1987),
    (VERDICT_FUNDAMENTAL, 876),
    (VERDICT_SCHEDULED_END, 342),
    (VERDICT_ABOLISHED, 233),
]

# ministry -> counts in VERDICTS order
MINISTRY_VERDICTS: List[Tuple[str, Tuple[int, int, int, int, int]]] = [
    ("財務省", (45, 89, 67, 22, 11)),
    ("内閣府", (56, 87, 78, 23, 12)),
    ("経済産業省", (276, 298, 112, 34, 23)),
    ("厚生労働省", (387, 356, 156, 54, 34)),
    ("国土交通省", (243, 234, 45, 32, 24)),
    ("総務省", (198, 167, 32, 21, 14)),
    ("文部科学省", (621, 412, 123, 56, 33)),
    ("外務省", (98, 67, 12, 12, 9)),
    ("農林水産省", (312, 234, 17, 43, 26)),
    ("環境省", (176, 123, 11, 21, 14)),
]

IMPROVEMENT_CASES: List[Tuple[str, str, str, str, str]] = [
    (
        "1234",
        VERDICT_FUNDAMENTAL,
        "事業の対象を若年層に絞り、デジタル技術活用を前提としたプログラムに刷新する。成果指標を見直し、就職率や収入向上率等の実質的効果を測定する。",
        "職業訓練総合支援事業",
        "厚生労働省",
    ),
    (
        "5678",
        VERDICT_PARTIAL,
        "補助対象を中小企業に限定し、導入設備の稼働率や省エネ効果を定量的に測定する体制を構築する。",
        "省エネ設備導入促進事業",
        "経済産業省",
    ),
    (
        "9012",
        VERDICT_FUNDAMENTAL,
        "一律配分方式を廃止し、人口減少率や高齢化率等の指標に基づく傾斜配分方式に変更する。",
        "地域活性化交付金",
        "総務省",
    ),
    (
        "3456",
        VERDICT_PARTIAL,
        "対象国を絞り込み、重点市場に集中した支援体制に移行する。",
        "農産物輸出促進対策事業",
        "農林水産省",
    ),
    (
        "7890",
        VERDICT_FUNDAMENTAL,
        "研究費補助から産学連携を促進するマッチングファンド方式に転換する。",
        "先端研究開発支援プログラム",
        "文部科学省",
    ),
]

CONTRACT_COUNTS: List[Tuple[str, int]] = [
    ("一般競争契約", 87654),
    ("随意契約", 65432),
    ("指名競争契約", 24321),
    ("企画競争", 12345),
    ("その他", 4381),
]

RECIPIENT_TYPE_AMOUNTS: List[Tuple[str, int]] = [
    ("株式会社", 152345678901),
    ("特殊法人", 87654321098),
    ("一般社団法人", 43210987654),
    ("地方公共団体", 32109876543),
    ("学校法人", 21098765432),
    ("国立大学法人", 10987654321),
    ("その他", 9876543210),
]

TOP_RECIPIENTS: List[Tuple[str, int, str]] = [
    ("大手建設株式会社", 12345678901, "株式会社"),
    ("国立研究開発法人科学技術振興機構", 9876543210, "特殊法人"),
    ("大手電機メーカー株式会社", 8765432109, "株式会社"),
    ("全国中小企業団体中央会", 7654321098, "一般社団法人"),
    ("大手自動車メーカー株式会社", 6543210987, "株式会社"),
    ("日本商工会議所", 5432109876, "一般社団法人"),
    ("国立研究開発法人産業技術総合研究所", 4321098765, "特殊法人"),
    ("○○県", 3210987654, "地方公共団体"),
    ("△△大学", 2109876543, "学校法人"),
    ("大手IT企業株式会社", 1987654321, "株式会社"),
]


def _distribution(counts: List[Tuple[str, int]], label: str, denominator: int) -> List[Dict[str, Any]]:
    return [{label: name, "count": count, "percentage": percentage(count, denominator)} for name, count in counts]


def _ministry_reviews() -> List[Dict[str, Any]]:
    rows = []
    for ministry, counts in MINISTRY_VERDICTS:
        total = sum(counts)
        row: Dict[str, Any] = {"ministry": ministry}
        row.update(dict(zip(VERDICTS, counts)))
        row["total"] = total
        row["improvementRate"] = round_half_up((counts[1] + counts[2]) / total * 100, 1)
        rows.append(row)
    return sorted(rows, key=lambda r: r["improvementRate"], reverse=True)


def build_sample_artifacts() -> Dict[str, Any]:
    verdict_total = sum(count for _, count in VERDICT_COUNTS)
    contract_total = sum(count for _, count in CONTRACT_COUNTS)
    type_total = sum(amount for _, amount in RECIPIENT_TYPE_AMOUNTS)
    return {
        "summary": {
            "totalProjects": TOTAL_PROJECTS,
            "newProjects": dict(PROJECT_CATEGORY_COUNTS)[CATEGORY_NEW],
            "endingProjects": dict(PROJECT_CATEGORY_COUNTS)[CATEGORY_ENDING],
            "improvementProjects": dict(VERDICT_COUNTS)[VERDICT_PARTIAL] + dict(VERDICT_COUNTS)[VERDICT_FUNDAMENTAL],
        },
        "ministry": _distribution(MINISTRY_COUNTS, "category", TOTAL_PROJECTS),
        "project_type": _distribution(PROJECT_CATEGORY_COUNTS, "category", TOTAL_PROJECTS),
        "expense_type": _distribution(EXPENSE_COUNTS, "category", TOTAL_PROJECTS),
        "performance": {
            "typeDistribution": [{"type": kind, "count": INDICATOR_COUNTS[kind]} for kind in INDICATOR_KINDS],
            "projectPerformance": [
                {"projectId": pid, "achievement": rate, "projectName": name, "ministry": ministry}
                for pid, rate, name, ministry in PROJECT_PERFORMANCE
            ],
        },
        "review": {
            "reviewDistribution": _distribution(VERDICT_COUNTS, "review", verdict_total),
            "organizationReviewArray": _ministry_reviews(),
            "improvementCases": [
                {"projectId": pid, "reviewType": verdict, "improvement": text, "projectName": name, "ministry": ministry}
                for pid, verdict, text, name, ministry in IMPROVEMENT_CASES
            ],
        },
        "contract": _distribution(CONTRACT_COUNTS, "method", contract_total),
        "spending": {
            "typeDistribution": [
                {"type": kind, "amount": amount, "percentage": percentage(amount, type_total)}
                for kind, amount in RECIPIENT_TYPE_AMOUNTS
            ],
            "topRecipients": [
                {"name": name, "amount": amount, "type": kind, "formattedAmount": format_amount(amount)}
                for name, amount, kind in TOP_RECIPIENTS
            ],
        },
    }


def write_sample_artifacts(output_dir: Path, *, indent: Optional[int] = 2) -> List[Path]:
    return write_artifacts(output_dir, build_sample_artifacts(), indent=indent)
