# taskboard/utils/deep_find.py
from typing import Any, Mapping


def deep_find_key(obj: Any, key_to_find: str) -> Any:
    """
    중첩된 객체에서 특정 키의 값을 재귀적으로 찾습니다.

    딕셔너리는 키로, 리스트/튜플은 각 원소를 순서대로, 일반 객체는 속성(__dict__)으로 탐색합니다.
    가장 먼저 발견된 값을 반환합니다.

    Args:
        obj: 탐색할 객체 (요청 인자 딕셔너리, 입력 객체 등).
        key_to_find: 찾을 키 이름. (예: 'board_id')

    Returns:
        키에 해당하는 값. 찾지 못하면 None.
    """
    if isinstance(obj, Mapping):
        if key_to_find in obj:
            return obj[key_to_find]
        children = obj.values()
    elif isinstance(obj, (list, tuple)):
        children = obj
    elif hasattr(obj, "__dict__"):
        attributes = vars(obj)
        if key_to_find in attributes:
            return attributes[key_to_find]
        children = attributes.values()
    else:
        return None

    for child in children:
        if isinstance(child, (str, bytes, int, float, bool)) or child is None:
            continue
        result = deep_find_key(child, key_to_find)
        if result is not None:
            return result
    return None
