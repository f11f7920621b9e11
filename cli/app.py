"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
등록된 리소스/데이터 소스의 스키마를 확인하고, 라이프사이클 동사를
직접 실행해 결과 상태를 JSON으로 출력합니다.

명령어 구조:
    icp --version                               # 버전 표시
    icp resources                               # 리소스/데이터 소스 목록
    icp schema <name>                           # 속성 스키마
    icp run <name> <verb> [--id] [--set k=v]    # 동사 실행

    예시:
    icp run is_security_group create --set vpc=r006-123 --set name=sg1
    icp run is_security_group read --id r006-sg-abc
    icp run private_dns_permitted_network delete --id inst1/zone1/net1
    icp run pi_key read --set pi_key_name=mykey --set pi_cloud_instance_id=abc

환경 변수:
    IC_API_KEY, IC_REGION, IC_GENERATION, IC_VISIBILITY, IC_LOG_LEVEL
"""

import json
import logging
from pathlib import Path
from typing import Any

import click

from core.config import LogConfig, get_env_bool, get_version, settings
from core.exceptions import ProviderError, format_error_for_user
from core.lifecycle import DataSource, LifecycleRouter, Resource
from core.schema import ResourceData
from core.session import build_session

_log_config = LogConfig.from_env()

# WARNING 레벨로 설정하여 INFO 로그가 결과 출력에 섞이지 않도록 함
logging.basicConfig(
    level=_log_config.level,
    format=_log_config.format,
    datefmt=_log_config.datefmt,
)

logger = logging.getLogger(__name__)

VERSION = get_version()

RESOURCE_VERBS = ("create", "read", "update", "delete", "exists", "import")
DATA_SOURCE_VERBS = ("read",)


# =============================================================================
# 입력 파싱
# =============================================================================


def _parse_value(raw: str) -> Any:
    """--set 값 해석 (JSON 리터럴이면 해당 타입, 아니면 문자열)"""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _parse_assignments(assignments: tuple[str, ...]) -> dict[str, Any]:
    desired: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"key=value 형식이어야 합니다: {item}", param_hint="--set")
        desired[key.strip()] = _parse_value(raw)
    return desired


def _load_state(path: Path | None) -> tuple[str, dict[str, Any]]:
    """이전 상태 파일 → (id, observed)"""
    if path is None:
        return "", {}
    try:
        state = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise click.BadParameter(f"JSON 파싱 실패: {e}", param_hint="--state") from e
    if not isinstance(state, dict):
        raise click.BadParameter("JSON 객체여야 합니다", param_hint="--state")
    identity = str(state.pop("id", "") or "")
    return identity, state


def _supports(resource: Resource, verb: str) -> bool:
    if verb == "update":
        return bool(resource.updatable)
    if verb == "import":
        return resource.importable
    return True


def _lookup(name: str) -> Resource | DataSource:
    from resources import DATA_SOURCES, RESOURCES

    if name in RESOURCES:
        return RESOURCES[name]
    if name in DATA_SOURCES:
        return DATA_SOURCES[name]
    available = ", ".join(sorted([*RESOURCES, *DATA_SOURCES]))
    raise click.BadParameter(f"알 수 없는 이름: {name} (사용 가능: {available})", param_hint="NAME")


# =============================================================================
# 명령어
# =============================================================================


@click.group()
@click.version_option(VERSION, prog_name="icp")
@click.option("--debug", is_flag=True, help="디버그 로그 출력")
def cli(debug: bool) -> None:
    """IBM Cloud 리소스 라이프사이클 도구"""
    if debug or get_env_bool(settings.ENV_DEBUG):
        from cli.ui import enable_debug_logging

        enable_debug_logging()


@cli.command("resources")
def list_resources() -> None:
    """리소스 및 데이터 소스 목록"""
    from cli.ui import print_table
    from resources import DATA_SOURCES, RESOURCES

    rows = []
    for resource in RESOURCES.values():
        verbs = [v for v in RESOURCE_VERBS if _supports(resource, v)]
        rows.append([resource.name, "resource", ", ".join(verbs), resource.description])
    for source in DATA_SOURCES.values():
        rows.append([source.name, "data source", ", ".join(DATA_SOURCE_VERBS), source.description])

    print_table("리소스", ["이름", "종류", "동사", "설명"], rows)


@cli.command("schema")
@click.argument("name")
def show_schema(name: str) -> None:
    """속성 스키마 표시"""
    from cli.ui import print_table

    target = _lookup(name)
    rows = [
        [
            attr_name,
            attr.type.value,
            ", ".join(attr.flags()),
            "" if attr.default is None else attr.default,
            attr.description,
        ]
        for attr_name, attr in target.schema.items()
    ]
    print_table(target.name, ["속성", "타입", "플래그", "기본값", "설명"], rows)

    if isinstance(target, Resource):
        updatable = ", ".join(sorted(target.updatable)) or "-"
        click.echo(f"갱신 가능: {updatable}")
        if target.timeouts.create or target.timeouts.delete:
            click.echo(f"제한 시간(분): create={target.timeouts.create}, delete={target.timeouts.delete}")


@cli.command("run")
@click.argument("name")
@click.argument("verb", type=click.Choice(RESOURCE_VERBS))
@click.option("--id", "identity", default=None, help="리소스 식별자")
@click.option("--set", "assignments", multiple=True, help="원하는 속성 값 (key=value, 다중 가능)")
@click.option(
    "--state",
    "state_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="이전 상태 JSON 파일",
)
def run(
    name: str,
    verb: str,
    identity: str | None,
    assignments: tuple[str, ...],
    state_file: Path | None,
) -> None:
    """리소스 동사 실행 후 상태를 JSON으로 출력"""
    from cli.ui import print_error, print_results_json, print_warning

    target = _lookup(name)
    desired = _parse_assignments(assignments)
    prior_id, observed = _load_state(state_file)

    try:
        session = build_session()
        router = LifecycleRouter(session)

        if isinstance(target, DataSource):
            if verb not in DATA_SOURCE_VERBS:
                raise click.BadParameter(f"데이터 소스는 {', '.join(DATA_SOURCE_VERBS)}만 지원합니다", param_hint="VERB")
            data = router.read_data_source(target, ResourceData(schema=target.schema, desired=desired))
            print_results_json(data.state())
            return

        data = ResourceData(
            schema=target.schema,
            desired=desired,
            observed=observed,
            id=identity or prior_id,
        )

        if verb == "create":
            router.create(target, data)
        elif verb == "read":
            router.read(target, data)
            if data.is_new():
                print_warning(f"{target.name}: 원격에 존재하지 않습니다")
        elif verb == "update":
            # 상태 파일의 사용자 지정 값 위에 --set 값을 덮어씀
            settable = {k: v for k, v in observed.items() if k in target.schema and target.schema[k].user_settable}
            data.desired = {**settable, **desired}
            router.update(target, data)
        elif verb == "delete":
            router.delete(target, data)
        elif verb == "exists":
            print_results_json({"id": data.id, "exists": router.exists(target, data)})
            return
        else:
            data = router.import_state(target, identity or prior_id)

        print_results_json(data.state())
    except ProviderError as e:
        logger.debug("작업 실패", exc_info=True)
        print_error(format_error_for_user(e))
        raise SystemExit(1) from e


if __name__ == "__main__":
    cli()
