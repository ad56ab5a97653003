# inventory_api/repositories/exceptions.py

class DuplicateEntryError(Exception):
    """유니크 제약 조건 위반으로 저장에 실패했을 때"""
    pass
