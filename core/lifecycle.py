"""
core/lifecycle.py - CRUD 라이프사이클 라우터

오케스트레이터가 기대하는 Create/Read/Update/Delete/Exists 계약을
세대별 핸들러 구현으로 분기하고, 결과를 하나의 형태로 정규화합니다.

주요 구성 요소:
- OperationContext: 한 작업 동안 고정되는 세션 + 세대
- LifecycleHandler: 세대별 구현이 따라야 하는 프로토콜
- Resource / DataSource: 스키마 + 세대별 핸들러 테이블
- LifecycleRouter: 동사별 진입점 (세대 선택은 진입 시 1회)

동작 요약:
    create  - 검증 → (범위 잠금) → 핸들러 생성 → 식별자 부여 → 상태 조정
    read    - 404면 식별자 제거 (에러 아님, 재생성 가능)
    update  - 추적 속성 변경이 없으면 벤더 호출 없이 즉시 반환
    delete  - 존재 재확인 → 이미 없으면 성공 → 삭제 → 식별자 제거
    exists  - Read를 bool로 축약 (부작용 없음)

Example:
    router = LifecycleRouter(session)
    data = ResourceData(schema=security_group.schema, desired={"vpc": "vpc-123", "name": "sg1"})
    router.create(security_group, data)
    print(data.id)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Any, Protocol

from core.exceptions import NotFoundError, ValidationError
from core.reconcile import Phase, reconcile
from core.schema import ResourceData, Schema, apply_defaults, validate_desired
from core.session import ClientSession, Generation, select_generation

logger = logging.getLogger(__name__)


# =============================================================================
# 계약
# =============================================================================


@dataclass(frozen=True)
class OperationContext:
    """작업 컨텍스트 (작업 도중 세대를 다시 계산하지 않음)"""

    session: ClientSession
    generation: Generation


class LifecycleHandler(Protocol):
    """세대별 CRUD 구현

    404 응답은 NotFoundError로, 그 밖의 벤더 에러는 RemoteRejectedError로 올립니다.
    """

    def create(self, ctx: OperationContext, data: ResourceData) -> tuple[str, dict[str, Any]]:
        """생성 후 (식별자, 평탄화된 관측 값) 반환"""
        ...

    def read(self, ctx: OperationContext, identity: str) -> dict[str, Any]:
        """평탄화된 관측 값 반환"""
        ...

    def update(self, ctx: OperationContext, identity: str, changes: dict[str, Any]) -> dict[str, Any]:
        """변경된 속성만 담아 한 번 갱신 후 관측 값 반환"""
        ...

    def delete(self, ctx: OperationContext, identity: str) -> None: ...


@dataclass(frozen=True)
class Timeouts:
    """오케스트레이터가 적용하는 작업 제한 시간 (분, None이면 기본값)"""

    create: int | None = None
    delete: int | None = None


ScopeKeyFunc = Callable[[ResourceData], str]


@dataclass(frozen=True)
class Resource:
    """관리 리소스 정의

    Attributes:
        name: 리소스 타입 이름 (예: "is_security_group")
        schema: 속성 스키마
        handlers: 세대 → 핸들러 테이블 (두 세대 모두 필요)
        updatable: update로 변경 가능한 속성 (나머지는 ForceNew 또는 computed)
        scope_key: 생성/삭제를 직렬화할 잠금 키 함수 (None이면 잠금 없음)
        timeouts: 생성/삭제 제한 시간
        importable: 기존 식별자로 가져오기 허용 여부
        description: 설명
    """

    name: str
    schema: Schema
    handlers: Mapping[Generation, LifecycleHandler]
    updatable: frozenset[str] = frozenset()
    scope_key: ScopeKeyFunc | None = None
    timeouts: Timeouts = field(default_factory=Timeouts)
    importable: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        missing = [g for g in Generation if g not in self.handlers]
        if missing:
            raise ValueError(f"{self.name}: 세대별 핸들러 누락 {[str(g) for g in missing]}")

    @classmethod
    def for_all_generations(cls, name: str, schema: Schema, handler: LifecycleHandler, **kwargs: Any) -> Resource:
        """세대 구분이 없는 벤더 API용 (같은 핸들러를 양쪽에 등록)"""
        return cls(name=name, schema=schema, handlers={g: handler for g in Generation}, **kwargs)

    def handler_for(self, generation: Generation) -> LifecycleHandler:
        return self.handlers[generation]


DataSourceRead = Callable[[OperationContext, ResourceData], tuple[str, dict[str, Any]]]


@dataclass(frozen=True)
class DataSource:
    """읽기 전용 데이터 소스 정의"""

    name: str
    schema: Schema
    read: DataSourceRead
    description: str = ""


# =============================================================================
# 라우터
# =============================================================================


class LifecycleRouter:
    """CRUD 진입점

    세션(잠금 레지스트리 포함)은 생성 시 주입됩니다.
    """

    def __init__(self, session: ClientSession):
        self.session = session

    def _context(self) -> OperationContext:
        return OperationContext(session=self.session, generation=select_generation(self.session))

    def _scoped(self, resource: Resource, data: ResourceData):
        if resource.scope_key is None:
            return nullcontext()
        return self.session.locks.hold(resource.scope_key(data))

    @staticmethod
    def _require_id(resource: Resource, data: ResourceData, verb: str) -> str:
        if data.is_new():
            raise ValidationError("id", "", f"{resource.name} {verb}에는 생성된 리소스 식별자가 필요합니다")
        return data.id

    @staticmethod
    def _validated(schema: Schema, desired: dict[str, Any]) -> dict[str, Any]:
        """기본값을 적용한 사본을 검증해 반환 (실패하면 원본 유지)"""
        effective = apply_defaults(schema, desired)
        validate_desired(schema, effective)
        return effective

    def create(self, resource: Resource, data: ResourceData) -> ResourceData:
        """리소스 생성

        실패하면 식별자가 부여되지 않아 오케스트레이터는 생성되지 않았음을 압니다.
        """
        ctx = self._context()
        data.desired = self._validated(resource.schema, data.desired)

        handler = resource.handler_for(ctx.generation)
        logger.info(f"{resource.name} 생성 시작 (generation={ctx.generation})")
        with self._scoped(resource, data):
            identity, observed = handler.create(ctx, data)

        data.set_id(identity)
        reconcile(data, observed, Phase.CREATE, self.session)
        logger.info(f"{resource.name} 생성 완료 [{identity}]")
        return data

    def read(self, resource: Resource, data: ResourceData) -> ResourceData:
        """원격 상태 조회

        404이면 에러 대신 식별자를 비워 반환합니다 (out-of-band 삭제 후 재생성 허용).
        """
        identity = self._require_id(resource, data, "read")
        ctx = self._context()
        try:
            observed = resource.handler_for(ctx.generation).read(ctx, identity)
        except NotFoundError:
            logger.warning(f"{resource.name} [{identity}] 원격에 없음 - 상태에서 제거")
            data.clear_id()
            return data

        reconcile(data, observed, Phase.READ, self.session)
        return data

    def update(self, resource: Resource, data: ResourceData) -> ResourceData:
        """변경 가능한 속성만 갱신

        생성과 같은 스키마 검증을 먼저 거칩니다.
        추적 속성이 바뀌지 않았으면 벤더 호출 없이 반환합니다.
        """
        identity = self._require_id(resource, data, "update")
        ctx = self._context()
        data.desired = self._validated(resource.schema, data.desired)

        changed = data.changed_fields(resource.updatable)
        if not changed:
            logger.debug(f"{resource.name} [{identity}] 변경 사항 없음")
            return data

        changes = {name: data.desired[name] for name in changed}
        logger.info(f"{resource.name} [{identity}] 갱신: {changed}")
        observed = resource.handler_for(ctx.generation).update(ctx, identity, changes)
        reconcile(data, observed, Phase.UPDATE, self.session)
        return data

    def delete(self, resource: Resource, data: ResourceData) -> ResourceData:
        """리소스 삭제 (이미 없으면 성공)

        실패하면 식별자와 상태는 그대로 유지됩니다.
        """
        if data.is_new():
            logger.debug(f"{resource.name}: 식별자가 없어 삭제할 대상 없음")
            return data

        identity = data.id
        ctx = self._context()
        handler = resource.handler_for(ctx.generation)

        with self._scoped(resource, data):
            try:
                handler.read(ctx, identity)
            except NotFoundError:
                logger.warning(f"{resource.name} [{identity}] 이미 삭제됨")
                data.clear_id()
                return data

            try:
                handler.delete(ctx, identity)
            except NotFoundError:
                logger.warning(f"{resource.name} [{identity}] 삭제 중 이미 사라짐")

        data.clear_id()
        logger.info(f"{resource.name} 삭제 완료 [{identity}]")
        return data

    def exists(self, resource: Resource, data: ResourceData) -> bool:
        """원격 존재 여부 (상태를 바꾸지 않음)"""
        if data.is_new():
            return False
        ctx = self._context()
        try:
            resource.handler_for(ctx.generation).read(ctx, data.id)
        except NotFoundError:
            return False
        return True

    def import_state(self, resource: Resource, identity: str) -> ResourceData:
        """기존 식별자로 리소스 가져오기

        Raises:
            ValidationError: 가져오기를 지원하지 않는 리소스
            NotFoundError: 원격에 없는 식별자
        """
        if not resource.importable:
            raise ValidationError("id", identity, f"{resource.name}은(는) 가져오기를 지원하지 않습니다")

        data = self.read(resource, ResourceData(schema=resource.schema, id=identity))
        if data.is_new():
            raise NotFoundError(resource.name, "import", identity)
        return data

    def read_data_source(self, source: DataSource, data: ResourceData) -> ResourceData:
        """데이터 소스 조회 (404는 에러로 전파)"""
        validate_desired(source.schema, data.desired)
        ctx = self._context()
        identity, observed = source.read(ctx, data)
        data.set_id(identity)
        reconcile(data, observed, Phase.READ, self.session)
        return data
