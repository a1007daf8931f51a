from dataclasses import dataclass
from enum import IntFlag
from typing import Iterator, List, Union

from .flags import FLAGS_BY_DOMAIN, PermissionDomain, domain_of


@dataclass(frozen=True)
class PermissionSet:
    """
    한 도메인의 권한 플래그 조합을 나타내는 불변 값 타입입니다.

    연산(|, &, -)은 항상 새 PermissionSet을 반환하며, 서로 다른 도메인의 집합을
    섞으려고 하면 ValueError가 발생합니다.

    예:
        >>> required = PermissionSet.of(BoardPermission.STEP_UPDATE, BoardPermission.TASK_VIEW)
        >>> BoardPermission.STEP_UPDATE in required
        True
    """
    domain: PermissionDomain
    mask: int = 0

    def __post_init__(self):
        object.__setattr__(self, "domain", PermissionDomain(self.domain))
        object.__setattr__(self, "mask", int(self.mask))

    @classmethod
    def of(cls, *flags: IntFlag) -> "PermissionSet":
        """플래그들로 집합을 만듭니다. 모든 플래그는 같은 도메인이어야 합니다."""
        if not flags:
            raise ValueError("At least one flag is required to infer the permission domain.")
        domain = domain_of(flags[0])
        mask = 0
        for flag in flags:
            if domain_of(flag) != domain:
                raise ValueError(f"Cannot combine {flag!r} with {domain.value} permissions.")
            mask |= int(flag)
        return cls(domain, mask)

    @classmethod
    def empty(cls, domain: PermissionDomain) -> "PermissionSet":
        return cls(PermissionDomain(domain), 0)

    def _coerce(self, other: Union["PermissionSet", IntFlag]) -> "PermissionSet":
        if isinstance(other, IntFlag):
            other = PermissionSet.of(other)
        if not isinstance(other, PermissionSet):
            raise TypeError(f"Expected a PermissionSet or a permission flag, got {type(other).__name__}.")
        if other.domain != self.domain:
            raise ValueError(
                f"Cannot mix {self.domain.value} and {other.domain.value} permissions."
            )
        return other

    def __or__(self, other):
        other = self._coerce(other)
        return PermissionSet(self.domain, self.mask | other.mask)

    def __and__(self, other):
        other = self._coerce(other)
        return PermissionSet(self.domain, self.mask & other.mask)

    def __sub__(self, other):
        other = self._coerce(other)
        return PermissionSet(self.domain, self.mask & ~other.mask)

    def __contains__(self, item) -> bool:
        return self.has(item)

    def __iter__(self) -> Iterator[IntFlag]:
        for flag in FLAGS_BY_DOMAIN[self.domain]:
            if self.mask & int(flag):
                yield flag

    def __bool__(self) -> bool:
        return self.mask != 0

    def has(self, required: Union["PermissionSet", IntFlag]) -> bool:
        """요구되는 비트를 '모두' 가지고 있는지 확인합니다. (하나만 있어서는 안 됨)"""
        required = self._coerce(required)
        return (self.mask & required.mask) == required.mask

    def missing(self, required: Union["PermissionSet", IntFlag]) -> "PermissionSet":
        """요구 집합 중 이 집합에 없는 플래그들."""
        required = self._coerce(required)
        return PermissionSet(self.domain, required.mask & ~self.mask)

    def names(self) -> List[str]:
        return [flag.name for flag in self]

    def __str__(self) -> str:
        names = ", ".join(self.names()) or "none"
        return f"{self.domain.value}[{names}]"
