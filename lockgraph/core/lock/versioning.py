"""版本号与版本范围

锁文件中的版本遵循 NuGet 语义化版本:
    major.minor[.patch[.revision]][-release.labels][+metadata]

比较规则:
  - 数字部分逐段比较，缺省段按 0 处理（1.0 == 1.0.0 == 1.0.0.0）
  - 预发布版本低于同号正式版本
  - 预发布标签逐个比较：纯数字按数值、且低于字母数字标签；字母数字不区分大小写
  - 构建元数据 (+xxx) 不参与比较
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field

from lockgraph.core.exceptions import VersionFormatError

_LABELS = r"[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*"
_VERSION_RE = re.compile(
    r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?"
    rf"(?:-({_LABELS}))?(?:\+({_LABELS}))?$"
)


def _label_key(label: str) -> tuple[int, int | str]:
    if label.isdigit():
        return (0, int(label))
    return (1, label.lower())


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """NuGet 风格的语义化版本"""

    major: int
    minor: int = 0
    patch: int = 0
    revision: int = 0
    release_labels: tuple[str, ...] = ()
    metadata: str = ""

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        m = _VERSION_RE.match(str(text).strip())
        if not m:
            raise VersionFormatError(str(text))
        major, minor, patch, revision, labels, metadata = m.groups()
        return cls(
            major=int(major),
            minor=int(minor or 0),
            patch=int(patch or 0),
            revision=int(revision or 0),
            release_labels=tuple(labels.split(".")) if labels else (),
            metadata=metadata or "",
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.release_labels)

    def _sort_key(self) -> tuple:
        return (
            self.major, self.minor, self.patch, self.revision,
            # 正式版本排在同号预发布版本之后
            0 if self.release_labels else 1,
            tuple(_label_key(label) for label in self.release_labels),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.release_labels:
            text += "-" + ".".join(self.release_labels)
        if self.metadata:
            text += "+" + self.metadata
        return text


@dataclass(frozen=True)
class VersionRange:
    """版本约束

    支持的写法:
        1.0          >= 1.0（NuGet 中裸版本号表示最低版本）
        [1.0]        == 1.0
        [1.0, 2.0)   1.0 <= v < 2.0
        (1.0, )      > 1.0
        (, 2.0]      <= 2.0
    """

    min_version: SemanticVersion | None = None
    is_min_inclusive: bool = True
    max_version: SemanticVersion | None = None
    is_max_inclusive: bool = False
    original: str = field(default="", compare=False)

    @classmethod
    def any(cls) -> VersionRange:
        """无上下界的范围，匹配任意版本"""
        return cls(is_min_inclusive=False)

    @classmethod
    def exact(cls, version: SemanticVersion | str) -> VersionRange:
        if isinstance(version, str):
            version = SemanticVersion.parse(version)
        return cls(
            min_version=version, is_min_inclusive=True,
            max_version=version, is_max_inclusive=True,
            original=f"[{version}]",
        )

    @classmethod
    def parse(cls, text: str) -> VersionRange:
        raw = str(text).strip()
        if not raw:
            raise VersionFormatError(raw, "空字符串")

        if raw[0] not in "[(":
            return cls(
                min_version=SemanticVersion.parse(raw),
                is_min_inclusive=True,
                original=raw,
            )

        if raw[-1] not in "])":
            raise VersionFormatError(raw, "缺少右括号")
        min_inclusive = raw[0] == "["
        max_inclusive = raw[-1] == "]"
        inner = raw[1:-1].strip()

        if "," not in inner:
            # 单版本写法只允许 [x]
            if not (min_inclusive and max_inclusive) or not inner:
                raise VersionFormatError(raw, "单版本范围必须写作 [x]")
            version = SemanticVersion.parse(inner)
            return cls(version, True, version, True, original=raw)

        parts = inner.split(",")
        if len(parts) != 2:
            raise VersionFormatError(raw, "范围只能包含一个逗号")
        low, high = (p.strip() for p in parts)
        if not low and not high:
            raise VersionFormatError(raw, "上下界不能同时为空")

        min_version = SemanticVersion.parse(low) if low else None
        max_version = SemanticVersion.parse(high) if high else None
        if min_version is not None and max_version is not None:
            if min_version > max_version:
                raise VersionFormatError(raw, "下界大于上界")
            if min_version == max_version and not (min_inclusive and max_inclusive):
                raise VersionFormatError(raw, "空范围")

        return cls(
            min_version=min_version,
            is_min_inclusive=min_inclusive and min_version is not None,
            max_version=max_version,
            is_max_inclusive=max_inclusive and max_version is not None,
            original=raw,
        )

    def satisfies(self, version: SemanticVersion) -> bool:
        if self.min_version is not None:
            if self.is_min_inclusive:
                if version < self.min_version:
                    return False
            elif version <= self.min_version:
                return False
        if self.max_version is not None:
            if self.is_max_inclusive:
                if version > self.max_version:
                    return False
            elif version >= self.max_version:
                return False
        return True

    def __str__(self) -> str:
        if self.min_version is None and self.max_version is None:
            return "*"
        if (
            self.min_version is not None
            and self.min_version == self.max_version
        ):
            return f"= {self.min_version}"
        parts = []
        if self.min_version is not None:
            op = ">=" if self.is_min_inclusive else ">"
            parts.append(f"{op} {self.min_version}")
        if self.max_version is not None:
            op = "<=" if self.is_max_inclusive else "<"
            parts.append(f"{op} {self.max_version}")
        return " && ".join(parts)
