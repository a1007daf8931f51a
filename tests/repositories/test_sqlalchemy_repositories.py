# tests/repositories/test_sqlalchemy_repositories.py
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from taskboard.database import models
from taskboard.database.database import Base
from taskboard.permissions.flags import BoardPermission
from taskboard.services.exceptions import InvalidPermissionMaskError, NoOtherStepsError
from taskboard.permissions.types import ResourceRef
from taskboard.repositories.sqlalchemy.sqlalchemy_member_repository import (
    SqlalchemyBoardMemberRepository, SqlalchemyProjectMemberRepository
)
from taskboard.repositories.sqlalchemy.sqlalchemy_resource_repository import (
    SqlalchemyBoardRepository, SqlalchemyProjectRepository
)
from taskboard.repositories.sqlalchemy.sqlalchemy_role_repository import SqlalchemyBoardRoleRepository
from taskboard.repositories.sqlalchemy.sqlalchemy_step_repository import SqlalchemyStepRepository
from taskboard.services.role_service import BoardRoleService
from taskboard.services.step_service import StepService

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def db_session():
    """메모리 SQLite 데이터베이스에 모든 테이블을 만들고 세션을 제공합니다."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def seeded(db_session):
    """소유자, 멤버 사용자, 프로젝트, 보드 두 개를 만듭니다."""
    owner = models.User(username="owner")
    alice = models.User(username="alice")
    project = models.Project(name="project", owner=owner)
    board = models.Board(name="board", project=project)
    other_board = models.Board(name="other", project=project)
    db_session.add_all([owner, alice, project, board, other_board])
    db_session.commit()
    return {"owner": owner, "alice": alice, "project": project, "board": board, "other_board": other_board}

# ===================================================================
#  리소스/멤버 리포지토리 테스트
# ===================================================================
class TestResourceAndMemberRepositories:
    def test_board_owner_is_project_owner(self, db_session, seeded):
        repo = SqlalchemyBoardRepository(db_session)

        ref = repo.find_owner_and_id(seeded["board"].id)

        assert ref == ResourceRef(id=seeded["board"].id, owner_id=seeded["owner"].id)
        assert repo.find_owner_and_id(999) is None

    def test_project_owner(self, db_session, seeded):
        ref = SqlalchemyProjectRepository(db_session).find_owner_and_id(seeded["project"].id)
        assert ref.owner_id == seeded["owner"].id

    def test_member_lookup_is_scoped_to_the_resource(self, db_session, seeded):
        """다른 보드의 멤버 레코드가 조회되지 않는지 테스트합니다."""
        # === Arrange (테스트 준비) ===
        role = models.BoardRole(
            board=seeded["board"], name="viewer", position=1,
            permissions_granted=int(BoardPermission.TASK_VIEW), permissions_denied=int(BoardPermission.TASK_REMOVE),
        )
        member = models.BoardMember(board=seeded["board"], user=seeded["alice"], roles=[role])
        db_session.add_all([role, member])
        db_session.commit()
        repo = SqlalchemyBoardMemberRepository(db_session)

        # === Act (실제 테스트 대상 실행) ===
        found = repo.find_by_user_and_resource(seeded["alice"].id, seeded["board"].id)
        elsewhere = repo.find_by_user_and_resource(seeded["alice"].id, seeded["other_board"].id)

        # === Assert (결과 검증) ===
        assert found.id == member.id
        assert [r.name for r in found.roles] == ["viewer"]
        assert elsewhere is None
        assert repo.find_by_id(member.id, seeded["other_board"].id) is None
        assert repo.count_roles(seeded["board"].id) == 1
        assert repo.count_roles(seeded["other_board"].id) == 0

    def test_project_member_persist(self, db_session, seeded):
        repo = SqlalchemyProjectMemberRepository(db_session)
        member = repo.persist(models.ProjectMember(project=seeded["project"], user=seeded["alice"]))

        assert repo.find_by_id(member.id, seeded["project"].id).user_id == seeded["alice"].id
        assert repo.count_roles(seeded["project"].id) == 0

# ===================================================================
#  정렬 항목 리포지토리 + 서비스 통합 테스트
# ===================================================================
class TestPositionedItemRepositories:
    def test_step_flow(self, db_session, seeded):
        """스텝 생성, 완료 지정, 이동, 삭제 후에도 저장된 위치가 1..N인지 테스트합니다."""
        board_id = seeded["board"].id
        repo = SqlalchemyStepRepository(db_session)
        service = StepService(repo)

        service.create(board_id, "To Do")
        service.create(board_id, "Done", finish_step=True)
        service.create(board_id, "Doing")
        service.move(board_id, repo.list_by_parent(board_id)[0].id, 2)

        steps = repo.list_by_parent(board_id)
        assert [(s.name, s.position) for s in steps] == [("Doing", 1), ("To Do", 2), ("Done", 3)]
        assert steps[-1].finish_step is True

        service.remove(board_id, steps[0].id)

        steps = repo.list_by_parent(board_id)
        assert [(s.name, s.position) for s in steps] == [("To Do", 1), ("Done", 2)]
        assert repo.list_by_parent(seeded["other_board"].id) == []

    def test_role_flow(self, db_session, seeded):
        board_id = seeded["board"].id
        repo = SqlalchemyBoardRoleRepository(db_session)
        member_repo = SqlalchemyBoardMemberRepository(db_session)
        service = BoardRoleService(repo, member_repo)
        member = member_repo.persist(models.BoardMember(board_id=board_id, user_id=seeded["alice"].id))

        viewer = service.create(board_id, "viewer", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE)
        editor = service.create(board_id, "editor", BoardPermission.TASK_UPDATE, BoardPermission.TASK_REMOVE)
        service.assign(board_id, member.id, editor["id"])
        service.remove(board_id, viewer["id"])

        roles = repo.list_by_parent(board_id)
        assert [(r.name, r.position) for r in roles] == [("editor", 1)]
        assert repo.find_by_id(viewer["id"], board_id) is None
        found = member_repo.find_by_user_and_resource(seeded["alice"].id, board_id)
        assert [r.id for r in found.roles] == [editor["id"]]

# ===================================================================
#  명시적 위치 지정 테스트
# ===================================================================
class TestExplicitRolePosition:
    def _age_roles(self, db_session, repo, board_id, delta):
        """저장된 역할들의 updated_at을 현재 시각에서 delta만큼 옮깁니다. (DB 시계와 로컬 시계의 차이)"""
        for role in repo.list_by_parent(board_id):
            role.updated_at = datetime.now() + delta
        db_session.commit()

    def test_create_at_position_wins_over_newer_siblings(self, db_session, seeded):
        """형제 역할의 updated_at이 더 최근이어도 지정한 위치에 들어가는지 테스트합니다."""
        # === Arrange (테스트 준비) ===
        board_id = seeded["board"].id
        repo = SqlalchemyBoardRoleRepository(db_session)
        service = BoardRoleService(repo, SqlalchemyBoardMemberRepository(db_session))
        service.create(board_id, "a", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE)
        service.create(board_id, "b", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE)
        self._age_roles(db_session, repo, board_id, timedelta(hours=8))

        # === Act (실제 테스트 대상 실행) ===
        created = service.create(board_id, "lead", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE, position=1)

        # === Assert (결과 검증) ===
        assert created["position"] == 1
        assert [(r.name, r.position) for r in repo.list_by_parent(board_id)] == [("lead", 1), ("a", 2), ("b", 3)]

    def test_update_to_position_wins_over_newer_siblings(self, db_session, seeded):
        board_id = seeded["board"].id
        repo = SqlalchemyBoardRoleRepository(db_session)
        service = BoardRoleService(repo, SqlalchemyBoardMemberRepository(db_session))
        service.create(board_id, "a", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE)
        service.create(board_id, "b", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE)
        last = service.create(board_id, "c", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE)
        self._age_roles(db_session, repo, board_id, timedelta(hours=8))

        service.update(board_id, last["id"], position=2)

        assert [(r.name, r.position) for r in repo.list_by_parent(board_id)] == [("a", 1), ("c", 2), ("b", 3)]

# ===================================================================
#  거부된 수정 테스트
# ===================================================================
class TestRejectedUpdates:
    def test_rejected_role_update_is_not_committed_later(self, db_session, seeded):
        """마스크 검증에 실패한 수정이 이후의 다른 저장과 함께 반영되지 않는지 테스트합니다."""
        # === Arrange (테스트 준비) ===
        board_id = seeded["board"].id
        repo = SqlalchemyBoardRoleRepository(db_session)
        service = BoardRoleService(repo, SqlalchemyBoardMemberRepository(db_session))
        role = service.create(board_id, "viewer", BoardPermission.TASK_VIEW, BoardPermission.TASK_REMOVE)

        # === Act (실제 테스트 대상 실행) ===
        with pytest.raises(InvalidPermissionMaskError):
            service.update(
                board_id, role["id"], name="renamed",
                permissions_denied=BoardPermission.STEP_UPDATE, permissions_granted=1,
            )
        with pytest.raises(ValueError):
            service.update(board_id, role["id"], name="renamed", position=0)
        service.create(board_id, "editor", BoardPermission.TASK_UPDATE, BoardPermission.TASK_REMOVE)

        # === Assert (결과 검증) ===
        db_session.expire_all()
        stored = repo.find_by_id(role["id"], board_id)
        assert stored.name == "viewer"
        assert stored.permissions_granted == BoardPermission.TASK_VIEW
        assert stored.permissions_denied == BoardPermission.TASK_REMOVE

    def test_rejected_step_update_is_not_committed_later(self, db_session, seeded):
        board_id = seeded["board"].id
        repo = SqlalchemyStepRepository(db_session)
        service = StepService(repo)
        step = service.create(board_id, "To Do", max=3)

        with pytest.raises(NoOtherStepsError):
            service.update(board_id, step["id"], name="Backlog", max=10, finish_step=True)
        service.create(board_id, "Doing")

        db_session.expire_all()
        stored = repo.find_by_id(step["id"], board_id)
        assert (stored.name, stored.max, stored.finish_step) == ("To Do", 3, False)
