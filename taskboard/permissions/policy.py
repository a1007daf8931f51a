"""
Permission policies

도메인별 마스크 검증(is_valid), 조합(combine), 실제 권한 계산(effective),
포함 검사(has) 규칙을 제공합니다.
"""

from typing import Dict, Iterable, Optional, Sequence

from taskboard.services.exceptions import InvalidPermissionMaskError
from taskboard.utils.logger import get_logger

from .flags import FLAGS_BY_DOMAIN, PermissionDomain, all_flags
from .permission_set import PermissionSet

logger = get_logger(__name__)


def combine(masks: Iterable[int]) -> int:
    """모든 마스크를 OR 합니다. 여러 권한을 요구하는 작업의 요구 마스크 계산에 사용됩니다."""
    result = 0
    for mask in masks:
        result |= int(mask)
    return result


def effective(granted: int, denied: int) -> int:
    """역할의 실제 권한: granted & ~denied. 거부가 항상 우선합니다."""
    return int(granted or 0) & ~int(denied or 0)


def has(effective_mask: int, required_mask: int) -> bool:
    """요구 마스크의 비트를 모두 가지고 있는지 확인합니다."""
    return (effective_mask & required_mask) == required_mask


class PermissionPolicy:
    """한 도메인의 닫힌 플래그 집합과 그 검증 규칙."""

    def __init__(self, domain: PermissionDomain):
        self.domain = PermissionDomain(domain)
        self.flags = FLAGS_BY_DOMAIN[self.domain]
        self.all_flags = all_flags(self.domain)

    def is_valid(self, mask: Optional[int]) -> bool:
        """
        마스크가 이 도메인에 유효한지 확인합니다.

        도메인에 정의되지 않은 비트가 하나라도 있거나, 정의된 비트가 하나도 없으면
        (mask == 0 포함) 유효하지 않습니다.
        """
        if mask is None:
            return False
        mask = int(mask)
        no_undefined_bits = (mask & ~self.all_flags) == 0
        at_least_one_valid_bit = (mask & self.all_flags) != 0
        return no_undefined_bits and at_least_one_valid_bit

    def validate(self, mask: Optional[int], label: str) -> int:
        """
        is_valid를 통과하지 못하면 예외를 발생시킵니다.

        Args:
            mask: 검사할 마스크.
            label: 오류 메시지에 표시할 값의 이름. ('granted' 또는 'denied')

        Returns:
            정수로 변환된 마스크.

        Raises:
            InvalidPermissionMaskError: 마스크가 유효하지 않을 때.
        """
        if not self.is_valid(mask):
            logger.debug("Rejected %s mask %r for %s domain", label, mask, self.domain.value)
            raise InvalidPermissionMaskError(self.domain.value, label, mask)
        return int(mask)

    def permission_set(self, mask: int = 0) -> PermissionSet:
        return PermissionSet(self.domain, int(mask) & self.all_flags)

    def full(self) -> PermissionSet:
        return PermissionSet(self.domain, self.all_flags)

    def from_names(self, names: Sequence[str]) -> PermissionSet:
        """플래그 이름 목록으로 집합을 만듭니다. 알 수 없는 이름은 ValueError."""
        flags = []
        for name in names:
            try:
                flags.append(self.flags[name])
            except KeyError:
                raise ValueError(f"Unknown {self.domain.value} permission: {name}") from None
        return PermissionSet(self.domain, combine(flags))

    def role_effective(self, role) -> PermissionSet:
        """역할 하나의 실제 권한 집합."""
        return self.permission_set(effective(role.permissions_granted, role.permissions_denied))

    def member_effective(self, roles: Iterable) -> PermissionSet:
        """멤버의 실제 권한: 할당된 모든 역할의 (granted & ~denied)를 OR 한 값."""
        return self.permission_set(
            combine(effective(r.permissions_granted, r.permissions_denied) for r in roles)
        )


POLICIES: Dict[PermissionDomain, PermissionPolicy] = {
    domain: PermissionPolicy(domain) for domain in PermissionDomain
}


def get_policy(domain: PermissionDomain) -> PermissionPolicy:
    return POLICIES[PermissionDomain(domain)]


def is_valid_mask(domain: PermissionDomain, mask: int) -> bool:
    """validateMask: 마스크가 도메인에 유효한지 여부만 반환합니다."""
    return get_policy(domain).is_valid(mask)
