# taskboard/services/exceptions.py

# --- Permission Mask Exceptions ---
class InvalidPermissionMaskError(Exception):
    """역할의 granted/denied 마스크가 도메인에 유효하지 않을 때"""
    def __init__(self, domain: str, label: str, mask: int):
        self.domain = domain
        self.label = label
        self.mask = mask
        super().__init__(
            f"The {label} permissions value {mask} is invalid for {domain} roles. "
            f"Make sure to enter only valid {domain} permissions."
        )

# --- Authorization Exceptions ---
class AuthorizationError(Exception):
    """권한 검사에서 요청이 거부되었을 때 (모든 거부 사유의 부모 클래스)"""
    pass

class NotAMemberError(AuthorizationError):
    """소유자도 아니고 멤버도 아닐 때"""
    pass

class NoRolesConfiguredError(AuthorizationError):
    """리소스에 역할이 하나도 없어 소유자만 작업할 수 있을 때"""
    pass

class InsufficientPermissionsError(AuthorizationError):
    """멤버의 실제 권한에 요구 권한 비트가 모두 포함되지 않을 때"""
    def __init__(self, message: str, missing=None):
        self.missing = missing
        super().__init__(message)

class ResourceNotFoundError(Exception):
    """권한 검사 대상 리소스(보드/프로젝트)를 찾을 수 없을 때"""
    pass

class BoardNotFoundError(ResourceNotFoundError):
    """보드를 찾을 수 없을 때"""
    pass

class ProjectNotFoundError(ResourceNotFoundError):
    """프로젝트를 찾을 수 없을 때"""
    pass

class UnknownOperationError(Exception):
    """작업 테이블에 등록되지 않은 작업 이름일 때"""
    pass

# --- Ordering Exceptions ---
class OrderingError(Exception):
    """정렬(위치) 작업의 전제 조건이 현재 컬렉션 상태와 맞지 않을 때"""
    pass

class ItemNotFoundError(OrderingError):
    """컬렉션 안에서 대상 항목을 찾을 수 없을 때"""
    pass

class TargetPositionNotFoundError(OrderingError):
    """이동할 위치를 차지하고 있는 항목이 없을 때"""
    pass

class SingleItemCollectionError(OrderingError):
    """항목이 하나뿐이라 위치를 바꿀 상대가 없을 때"""
    pass

class NoOtherStepsError(OrderingError):
    """스텝이 하나뿐이라 완료 스텝으로 지정할 수 없을 때"""
    pass

class CannotDisplacePinnedStepError(OrderingError):
    """완료 스텝의 위치로 다른 스텝을 이동하려고 할 때"""
    pass

class CannotMovePinnedStepError(OrderingError):
    """완료 스텝 자체를 이동하려고 할 때"""
    pass

class AlreadyPinnedError(OrderingError):
    """이미 완료 스텝인 스텝을 다시 완료 스텝으로 지정할 때"""
    pass

# --- Service Exceptions ---
class StepNotFoundError(Exception):
    """보드에서 스텝을 찾을 수 없을 때"""
    pass

class RoleNotFoundError(Exception):
    """역할을 찾을 수 없을 때"""
    pass

class MemberNotFoundError(Exception):
    """멤버를 찾을 수 없을 때"""
    pass

class RoleAlreadyAssignedError(Exception):
    """멤버가 이미 해당 역할을 가지고 있을 때"""
    pass

class RoleNotAssignedError(Exception):
    """멤버가 회수하려는 역할을 가지고 있지 않을 때"""
    pass

class FinishStepConflictError(Exception):
    """보드에 이미 완료 스텝이 있는데 또 만들려고 할 때"""
    pass
