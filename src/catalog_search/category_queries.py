"""Static table turning a category filter label into a provider query."""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from .models import Category

ALL = "All"
# Label the original catalog pages used for the unfiltered view
ALL_ALIASES = frozenset({ALL.lower(), "semua"})

INTERNSHIP_SUFFIX = "internship report"


def _freeze(table: Mapping[str, str]) -> Mapping[str, str]:
    if ALL not in table:
        raise ValueError(f"query table is missing the {ALL!r} entry")
    return MappingProxyType(dict(table))


GENERIC_QUERIES = _freeze({ALL: "books"})

CATEGORY_QUERIES: Mapping[Category, Mapping[str, str]] = MappingProxyType({
    Category.DIGITAL_BOOK: _freeze({
        ALL: "buku teknik politeknik",
        "Teknologi Rekayasa Multimedia": "multimedia desain grafis animasi",
        "Teknologi Rekayasa Pangan": "teknologi pangan pengolahan makanan",
        "Teknologi Rekayasa Metalurgi": "metalurgi material logam",
        "Arsitektur": "arsitektur desain bangunan",
        "Teknik Sipil": "teknik sipil konstruksi",
        "Teknik Elektronika": "teknik elektronika mikrokontroler",
        "Teknik Mesin dan Otomotif": "teknik mesin otomotif",
    }),
    Category.JOURNAL: _freeze({
        ALL: "jurnal ilmiah teknik politeknik",
        "Teknologi Rekayasa Multimedia": "jurnal multimedia teknologi informasi",
        "Teknologi Rekayasa Pangan": "jurnal teknologi pangan",
        "Teknologi Rekayasa Metalurgi": "jurnal metalurgi material",
        "Arsitektur": "jurnal arsitektur perancangan",
        "Teknik Sipil": "jurnal teknik sipil konstruksi",
        "Teknik Elektronika": "jurnal elektronika telekomunikasi",
        "Teknik Mesin dan Otomotif": "jurnal teknik mesin otomotif",
    }),
    Category.TEACHING_MODULE: _freeze({
        ALL: "modul pembelajaran teknik",
        "Semester 1-2": "dasar teknik fisika matematika",
        "Semester 3-4": "pemrograman jaringan komputer",
        "Semester 5-6": "metodologi penelitian tugas akhir",
        "Praktikum": "panduan praktikum laboratorium teknik",
    }),
    Category.INTERNSHIP_REPORT: _freeze({
        ALL: "laporan magang kerja praktek",
        "2024": "internship report 2024 engineering",
        "2023": "internship report 2023 engineering",
        "2022": "internship report 2022 engineering",
        "Teknologi Rekayasa Multimedia": "laporan magang multimedia",
        "Teknologi Rekayasa Pangan": "laporan magang teknologi pangan",
        "Teknologi Rekayasa Metalurgi": "laporan magang metalurgi",
        "Arsitektur": "laporan magang arsitektur",
        "Teknik Sipil": "laporan magang teknik sipil",
        "Teknik Elektronika": "laporan magang elektronika",
        "Teknik Mesin dan Otomotif": "laporan magang teknik mesin",
    }),
})


@dataclass(frozen=True)
class ResolvedQuery:
    """Provider query for a (category, filter label) pair."""
    query: str
    label: str
    is_broad: bool


def is_all_label(label: Optional[str]) -> bool:
    return not label or label.strip().lower() in ALL_ALIASES


def table_for(category: Any) -> Mapping[str, str]:
    """The query table of a category, or the generic table for an unknown one."""
    parsed = Category.parse(category)
    if parsed is None:
        return GENERIC_QUERIES
    return CATEGORY_QUERIES[parsed]


def labels(category: Any) -> Tuple[str, ...]:
    """Filter labels offered for a category, ``"All"`` first."""
    return tuple(table_for(category).keys())


def _finish(category: Any, query: str) -> str:
    if Category.parse(category) is Category.INTERNSHIP_REPORT:
        return f"{query} {INTERNSHIP_SUFFIX}"
    return query


def resolve(category: Any, filter_label: Optional[str] = None) -> ResolvedQuery:
    """Translate a filter label into a provider query; unknown labels get ``"All"``."""
    table = table_for(category)
    if not is_all_label(filter_label) and filter_label in table:
        return ResolvedQuery(_finish(category, table[filter_label]), filter_label, False)
    return ResolvedQuery(_finish(category, table[ALL]), ALL, True)


def resolve_all(category: Any) -> ResolvedQuery:
    return resolve(category, ALL)
