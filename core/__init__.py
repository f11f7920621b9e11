# core/__init__.py
"""
core - IBM Cloud 리소스 라이프사이클 인프라

리소스 정의가 공통으로 사용하는 세션, 스키마, 라우터, 잠금을 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── session/        # 벤더 클라이언트 세션 및 API 세대 선택
    ├── config.py       # 중앙 설정 관리 (환경 변수)
    ├── exceptions.py   # 통합 예외 계층
    ├── schema.py       # 속성 스키마 및 ResourceData
    ├── lifecycle.py    # CRUD 라우터 (세대별 핸들러 분기)
    ├── reconcile.py    # 원격 상태 → 로컬 상태 반영
    ├── identity.py     # 복합 식별자
    └── locks.py        # 이름 기반 잠금 레지스트리

Usage:
    from core.lifecycle import LifecycleRouter
    from core.schema import ResourceData
    from core.session import build_session
    from resources import get_resource

    router = LifecycleRouter(build_session())
    sg = get_resource("is_security_group")
    data = router.create(sg, ResourceData(schema=sg.schema, desired={"vpc": "r006-123", "name": "sg1"}))
    print(data.id)

    # 예외 처리
    from core.exceptions import ProviderError, format_error_for_user
    try:
        router.read(sg, data)
    except ProviderError as e:
        print(format_error_for_user(e))
"""
