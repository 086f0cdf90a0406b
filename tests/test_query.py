"""JoinQuery / resolve_sort / pagination / visibility 단위 테스트"""

import pytest
from bson import ObjectId

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.query import (
    JoinQuery, JoinSpec, Page, PageLabels, ensure_visible, normalize_page, paginate,
    resolve_sort, visible_filter
)
from common.query.pagination import MAX_LIMIT

from tests.conftest import make_user, make_video


class TestJoinQuery:

    def test_stage_order(self):
        query = JoinQuery(
            base_filter={'is_published': True},
            joins=(JoinSpec('users', 'owner'),),
            post_filter={'owner.username': 'alice'},
            projection={'title': 1},
            sort=(('views', -1),)
        )

        stages = query.pipeline(skip=10, limit=10)

        assert [next(iter(stage)) for stage in stages] == [
            '$match', '$lookup', '$unwind', '$match', '$sort', '$skip', '$limit', '$project'
        ]
        assert stages[2]['$unwind'] == {'path': '$owner', 'preserveNullAndEmptyArrays': False}

    def test_count_pipeline_applies_same_filters(self):
        query = JoinQuery(
            base_filter={'liked_by': 1},
            joins=(JoinSpec('videos', 'target_id', as_field='video'),),
            post_filter={'video.is_published': True}
        )

        count = query.count_pipeline()

        assert count[:-1] == query.pipeline()[:4]
        assert count[-1] == {'$count': 'total'}

    def test_sort_gets_id_tie_break(self):
        ascending = JoinQuery(base_filter={}, sort=(('title', 1),))
        descending = JoinQuery(base_filter={}, sort=(('views', -1),))

        assert list(ascending.sort_stage()['$sort'].items()) == [('title', 1), ('_id', 1)]
        assert list(descending.sort_stage()['$sort'].items()) == [('views', -1), ('_id', -1)]

    def test_outer_join_keeps_rows(self):
        spec = JoinSpec('users', 'sender', preserve_missing=True)
        assert spec.stages()[1]['$unwind']['preserveNullAndEmptyArrays'] is True


class TestResolveSort:

    MAPPING = {'createdAt': 'created_at', 'views': 'views'}

    def test_known_key(self):
        assert resolve_sort('views', 'asc', self.MAPPING, 'createdAt') == (('views', 1),)

    def test_unknown_key_falls_back_to_default(self):
        assert resolve_sort('password', 'desc', self.MAPPING, 'createdAt') == (('created_at', -1),)

    def test_missing_key_and_order(self):
        assert resolve_sort(None, None, self.MAPPING, 'createdAt') == (('created_at', -1),)


class TestNormalizePage:

    @pytest.mark.parametrize('page, limit, expected', [
        (None, None, (1, 10)),
        (0, -5, (1, 10)),
        ('3', '20', (3, 20)),
        ('abc', 'xyz', (1, 10)),
        (2, 1000, (2, MAX_LIMIT)),
    ])
    def test_normalize(self, page, limit, expected):
        assert normalize_page(page, limit) == expected


class TestPage:

    def test_metadata(self):
        page = Page(docs=[], total_docs=25, page=2, limit=10)

        assert page.total_pages == 3
        assert page.has_next_page and page.has_prev_page
        assert (page.next_page, page.prev_page) == (3, 1)

    def test_last_page(self):
        page = Page(docs=[], total_docs=25, page=3, limit=10)

        assert not page.has_next_page
        assert page.next_page is None

    def test_empty(self):
        page = Page(docs=[], total_docs=0, page=1, limit=10)

        assert page.total_pages == 0
        assert not page.has_next_page and not page.has_prev_page


class TestPaginate:

    def test_pages_split_and_labels(self, db):
        owner = make_user(db)
        for index in range(25):
            make_video(db, owner, title=f'video-{index:02d}', views=index)

        query = JoinQuery(
            base_filter={'is_published': True},
            joins=(JoinSpec('users', 'owner'),),
            projection={'title': 1, 'owner.username': 1},
            sort=(('views', -1),)
        )
        labels = PageLabels(docs='videos', total_docs='totalVideos')
        sizes = [len(paginate(db.videos, query, number, 10, labels).docs) for number in (1, 2, 3)]

        first = paginate(db.videos, query, 1, 10, labels)
        assert sizes == [10, 10, 5]
        assert first.total_docs == 25
        assert first.docs[0]['title'] == 'video-24'
        assert first.docs[0]['owner'] == {'username': 'alice'}
        assert first.labels.docs == 'videos'

    def test_page_beyond_last_returns_empty_docs(self, db):
        owner = make_user(db)
        make_video(db, owner)

        page = paginate(db.videos, JoinQuery(base_filter={}), 5, 10)

        assert page.docs == []
        assert page.total_docs == 1
        assert page.page == 5

    def test_dangling_reference_excluded_from_count(self, db):
        owner = make_user(db)
        make_video(db, owner, title='kept')
        db.videos.insert_one({'owner': ObjectId(), 'title': 'orphan', 'is_published': True})

        query = JoinQuery(base_filter={}, joins=(JoinSpec('users', 'owner'),))
        page = paginate(db.videos, query, 1, 10)

        assert page.total_docs == 1
        assert [doc['title'] for doc in page.docs] == ['kept']


class TestVisibility:

    def test_public_passes_for_anyone(self):
        ensure_visible(True, ObjectId(), None)

    def test_private_without_requester_is_unauthenticated(self):
        with pytest.raises(BusinessError) as exc:
            ensure_visible(False, ObjectId(), None)
        assert exc.value.error_enum == APIError.AUTH_REQUIRED

    def test_private_for_other_user_is_forbidden(self):
        with pytest.raises(BusinessError) as exc:
            ensure_visible(False, ObjectId(), ObjectId(), forbidden=APIError.PLAYLIST_FORBIDDEN)
        assert exc.value.error_enum == APIError.PLAYLIST_FORBIDDEN

    def test_private_for_owner_passes(self):
        owner = ObjectId()
        ensure_visible(False, owner, str(owner))

    def test_visible_filter(self):
        requester = ObjectId()

        assert visible_filter('is_public', 'owner', None) == {'is_public': True}
        assert visible_filter('is_public', 'owner', requester) == {
            '$or': [{'is_public': True}, {'owner': requester}]
        }
