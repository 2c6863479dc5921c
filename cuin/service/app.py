"""FastAPI application exposing read-only views over a usage payload."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import DEFAULT_HOST, DEFAULT_PORT
from ..explorer import UnknownComponentError, UsageExplorer
from ..logging import get_logger
from ..models import Component, Instance, PackageIdentity, PackageWithCount
from ..props_analyze import PropAnalysis
from ..search_param import parse_as_string, parse_comma_separated, parse_prop_filters


class HealthResponse(BaseModel):
    status: str


class PackageModel(BaseModel):
    type: str
    name: Optional[str] = None
    version: Optional[str] = None
    key: Optional[str] = None
    count: Optional[int] = None


class ComponentSummary(BaseModel):
    id: str
    name: str
    package: PackageModel
    instance_count: int


class ComponentListResponse(BaseModel):
    total: int
    count: int
    components: List[ComponentSummary]


class ValueModel(BaseModel):
    value: str
    count: int
    percentage: float


class PropAnalysisModel(BaseModel):
    key: str
    total_count: int
    total_percentage: float
    coverage: float
    no_value_count: int
    values: List[ValueModel]


class PropModel(BaseModel):
    key: str
    raw: str
    prop_type: str
    value: Optional[str] = None


class InstanceModel(BaseModel):
    file_path: str
    raw: str
    start_line: int
    end_line: int
    import_specifier: Optional[str] = None
    resolved_path: str
    package: PackageModel
    props: List[PropModel]


class InstanceListResponse(BaseModel):
    total: int
    count: int
    has_active_filters: bool
    instances: List[InstanceModel]
    filtered_counts: Dict[str, Dict[str, int]]


def create_app(explorer: UsageExplorer) -> FastAPI:
    """Create the FastAPI application serving ``explorer``'s payload."""

    app = FastAPI(title="cuin", version="0.1.0")
    logger = get_logger("service")

    async def get_explorer() -> UsageExplorer:
        return explorer

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/api/payload.json")
    async def payload_document(current: UsageExplorer = Depends(get_explorer)) -> JSONResponse:
        return JSONResponse(content=current.document)

    @app.get("/api/packages", response_model=List[PackageModel])
    async def packages(current: UsageExplorer = Depends(get_explorer)) -> List[PackageModel]:
        return [_package_with_count(package) for package in current.packages]

    @app.get("/api/components", response_model=ComponentListResponse)
    async def components(
        q: Optional[str] = None,
        exclude: Optional[str] = None,
        sort: Optional[str] = None,
        current: UsageExplorer = Depends(get_explorer),
    ) -> ComponentListResponse:
        excluded = parse_comma_separated(exclude) if exclude is not None else None
        listed = current.list_components(
            name_query=parse_as_string(q),
            excluded_packages=excluded,
            sort_by=sort or None,
        )
        return ComponentListResponse(
            total=len(current.components),
            count=len(listed),
            components=[_component_summary(component) for component in listed],
        )

    @app.get("/api/components/{component_id}", response_model=ComponentSummary)
    async def component_detail(
        component_id: str, current: UsageExplorer = Depends(get_explorer)
    ) -> ComponentSummary:
        return _component_summary(current.component(component_id))

    @app.get("/api/components/{component_id}/props", response_model=List[PropAnalysisModel])
    async def component_props(
        component_id: str, current: UsageExplorer = Depends(get_explorer)
    ) -> List[PropAnalysisModel]:
        return [_prop_analysis(item) for item in current.props_analysis(component_id)]

    @app.get("/api/components/{component_id}/instances", response_model=InstanceListResponse)
    async def component_instances(
        component_id: str,
        exclude_package: List[str] = Query(default=[]),
        prop: List[str] = Query(default=[]),
        current: UsageExplorer = Depends(get_explorer),
    ) -> InstanceListResponse:
        store = current.instance_store(
            component_id,
            excluded_packages=parse_comma_separated(exclude_package),
            prop_filters=parse_prop_filters(prop),
        )
        filtered = store.filtered_instances()
        logger.debug(
            "Component %s: %d of %d instances after filtering",
            component_id,
            len(filtered),
            len(store.instances),
        )
        return InstanceListResponse(
            total=len(store.instances),
            count=len(filtered),
            has_active_filters=store.has_active_filters(),
            instances=[_instance(instance) for instance in filtered],
            filtered_counts=store.filtered_distribution(),
        )

    @app.exception_handler(UnknownComponentError)
    async def unknown_component_handler(
        _: Any, exc: UnknownComponentError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    return app


def run_service(
    explorer: UsageExplorer,
    *,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:  # pragma: no cover - integration path
    """Serve an already-loaded payload; load errors surface before the server starts."""
    import uvicorn

    get_logger("service").info(
        "Serving %d components from %s at http://%s:%d",
        len(explorer.components),
        explorer.meta.base_path,
        host,
        port,
    )
    uvicorn.run(create_app(explorer), host=host, port=port)


def _package_model(package: PackageIdentity, **extra: Any) -> PackageModel:
    return PackageModel(
        type=package.type,
        name=getattr(package, "name", None),
        version=getattr(package, "version", None),
        **extra,
    )


def _package_with_count(package: PackageWithCount) -> PackageModel:
    return _package_model(package.identity, key=package.key, count=package.count)


def _component_summary(component: Component) -> ComponentSummary:
    return ComponentSummary(
        id=component.id,
        name=component.name,
        package=_package_model(component.package.identity, key=component.package.key),
        instance_count=component.instance_count,
    )


def _prop_analysis(analysis: PropAnalysis) -> PropAnalysisModel:
    return PropAnalysisModel(
        key=analysis.key,
        total_count=analysis.total_count,
        total_percentage=analysis.total_percentage,
        coverage=analysis.coverage,
        no_value_count=analysis.no_value_count,
        values=[
            ValueModel(value=item.value, count=item.count, percentage=item.percentage)
            for item in analysis.values
        ],
    )


def _instance(instance: Instance) -> InstanceModel:
    return InstanceModel(
        file_path=instance.file_path,
        raw=instance.raw,
        start_line=instance.span.start_line,
        end_line=instance.span.end_line,
        import_specifier=instance.import_specifier,
        resolved_path=instance.resolved_path,
        package=_package_model(instance.package),
        props=[
            PropModel(key=prop.key, raw=prop.raw, prop_type=prop.prop_type, value=prop.value)
            for prop in instance.props
        ],
    )
