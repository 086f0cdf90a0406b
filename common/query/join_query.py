from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

SortSpec = Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True)
class JoinSpec:
    """
    한 단계(one-hop) 조인. $lookup 결과 배열은 $unwind로 단일 객체로 평탄화한다.

    preserve_missing=False (기본값): 참조 문서가 삭제되어 없으면 해당 행은 결과에서 빠진다 (inner join).
    preserve_missing=True: 행을 유지하고 조인 필드를 비워 둔다 (outer join).
    """
    collection: str
    local_field: str
    foreign_field: str = '_id'
    as_field: Optional[str] = None
    preserve_missing: bool = False

    @property
    def output_field(self) -> str:
        return self.as_field or self.local_field

    def stages(self) -> List[Dict]:
        return [
            {'$lookup': {
                'from': self.collection,
                'localField': self.local_field,
                'foreignField': self.foreign_field,
                'as': self.output_field
            }},
            {'$unwind': {
                'path': f'${self.output_field}',
                'preserveNullAndEmptyArrays': self.preserve_missing
            }}
        ]


@dataclass(frozen=True)
class JoinQuery:
    """
    실행 전의 조인 조회 명세. pipeline()/count_pipeline()은 호출할 때마다 새 리스트를 만들므로
    같은 JoinQuery를 여러 번(페이지별로) 재사용할 수 있다.

    단계 순서: $match(base_filter) → 조인들 → $match(post_filter) → extra_stages → $sort → $skip → $limit → $project
    count_pipeline은 post_filter까지 동일하게 적용하므로 totalDocs가 실제로 조회 가능한 행 수와 일치한다.
    """
    base_filter: Mapping[str, Any]
    joins: Tuple[JoinSpec, ...] = ()
    projection: Optional[Mapping[str, Any]] = None
    sort: SortSpec = (('created_at', -1),)
    post_filter: Optional[Mapping[str, Any]] = None
    extra_stages: Tuple[Dict, ...] = field(default=())

    def _filter_stages(self) -> List[Dict]:
        stages = [{'$match': dict(self.base_filter)}]
        for join in self.joins:
            stages.extend(join.stages())
        if self.post_filter:
            stages.append({'$match': dict(self.post_filter)})
        return stages

    def sort_stage(self) -> Dict:
        keys = list(self.sort)
        if all(key != '_id' for key, _ in keys):
            #NOTE: 동일 정렬값끼리의 순서를 _id로 고정해야 페이지 간 중복/누락이 없다
            tie_direction = -1
            if keys and keys[-1][1] in (1, -1):
                tie_direction = keys[-1][1]
            keys.append(('_id', tie_direction))
        return {'$sort': dict(keys)}

    def pipeline(self, skip: Optional[int] = None, limit: Optional[int] = None) -> List[Dict]:
        stages = self._filter_stages()
        stages.extend(dict(stage) for stage in self.extra_stages)
        stages.append(self.sort_stage())
        if skip:
            stages.append({'$skip': skip})
        if limit:
            stages.append({'$limit': limit})
        if self.projection:
            stages.append({'$project': dict(self.projection)})
        return stages

    def count_pipeline(self) -> List[Dict]:
        return self._filter_stages() + [{'$count': 'total'}]


def resolve_sort(sort_by, sort_order, mapping: Mapping[str, Any], default_key: str) -> SortSpec:
    """
    클라이언트가 보낸 sortBy 값을 허용 목록(mapping)으로만 필드명에 매핑한다.
    목록에 없는 값은 default_key로 대체되며, 임의 필드명이 파이프라인에 들어가지 않는다.
    """
    field_name = mapping.get(sort_by) if sort_by else None
    if field_name is None:
        field_name = mapping[default_key]
    direction = 1 if str(sort_order).lower() == 'asc' else -1
    return ((field_name, direction),)
