"""Tests for index construction and the query service."""

import logging
import textwrap
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import INIT_APPLY_DOC
from refindex.errors import ParseError, ValidationError
from refindex.knowledge import QueryService, Section, build_index, parse_sections


def _service(text: str) -> QueryService:
    return QueryService(build_index(parse_sections(text)))


GUIDE = textwrap.dedent(
    """\
    # Remote State

    Shared state for teams.

    ## S3 Backend

    ```hcl
    terraform {
      backend "s3" {
        bucket = "state"
      }
    }
    ```

    ## Workspaces

    ```sh
    terraform workspace new staging
    terraform workspace select default
    ```

    ## Migrating State

    ```sh
    terraform init -migrate-state
    terraform state list
    ```
    """
)


class TestBuildIndex:
    def test_empty_input_builds_empty_index(self):
        index = build_index(parse_sections(""))
        assert len(index) == 0
        assert dict(index.keywords) == {}
        assert QueryService(index).list_all() == []

    def test_every_keyword_maps_to_existing_sections(self):
        index = build_index(parse_sections(GUIDE))
        for keyword, positions in index.keywords.items():
            assert positions, keyword
            assert list(positions) == sorted(set(positions))
            for position in positions:
                assert index.sections[position].position == position

    def test_title_and_anchor_keywords(self):
        index = build_index(parse_sections(GUIDE))
        assert index.positions("remote") == (0,)
        assert index.positions("backend s3") == (1,)
        assert index.positions("terraform workspace") == (2,)
        assert index.positions("state") == (0, 3)
        assert index.positions("terraform") == (2, 3)

    def test_index_is_read_only(self):
        index = build_index(parse_sections(GUIDE))
        with pytest.raises(TypeError):
            index.keywords["new"] = (0,)

    def test_deterministic(self):
        first = build_index(parse_sections(GUIDE))
        second = build_index(parse_sections(GUIDE))
        assert first.sections == second.sections
        assert dict(first.keywords) == dict(second.keywords)
        assert list(first.keywords) == sorted(first.keywords)

    def test_blank_title_rejected_and_rest_indexed(self, caplog):
        text = "# Init\n\n##  \n\n```sh\nterraform destroy\n```\n\n# Apply\n"
        with caplog.at_level(logging.WARNING, logger="refindex.index"):
            index = build_index(parse_sections(text))

        assert [s.title for s in index.sections] == ["Init", "Apply"]
        assert [s.position for s in index.sections] == [0, 1]
        assert len(index.rejected) == 1
        assert isinstance(index.rejected[0], ValidationError)
        assert index.rejected[0].line == 3
        assert "terraform destroy" not in index.keywords
        assert "empty title" in caplog.text

    def test_parse_error_produces_no_index(self):
        with pytest.raises(ParseError):
            build_index(parse_sections("# Init\n\n```sh\nterraform init\n"))

    def test_accepts_prebuilt_sections(self):
        index = build_index([Section("Plan"), Section("   "), Section("Output")])
        assert [s.title for s in index.sections] == ["Plan", "Output"]
        assert index.positions("output") == (1,)


class TestQueryService:
    def test_lookup_apply_returns_only_apply(self):
        service = _service(INIT_APPLY_DOC)
        assert [s.title for s in service.lookup("apply")] == ["Apply"]

    def test_lookup_is_case_insensitive(self):
        service = _service(INIT_APPLY_DOC)
        assert service.lookup("APPLY") == service.lookup("apply")

    def test_lookup_is_idempotent(self):
        service = _service(GUIDE)
        assert service.lookup("state") == service.lookup("state")

    def test_lookup_no_match_is_empty(self):
        service = _service(GUIDE)
        assert service.lookup("kubernetes") == []
        assert service.lookup("") == []
        assert service.lookup("   ") == []
        assert service.lookup("the") == []

    def test_lookup_anchor_phrase(self):
        service = _service(GUIDE)
        assert [s.title for s in service.lookup("terraform  Workspace")] == ["Workspaces"]
        assert [s.title for s in service.lookup("backend s3")] == ["S3 Backend"]

    def test_lookup_multiword_requires_all_tokens(self):
        service = _service(GUIDE)
        assert [s.title for s in service.lookup("migrating terraform")] == ["Migrating State"]
        assert service.lookup("remote terraform") == []

    def test_lookup_results_in_document_order(self):
        service = _service(GUIDE)
        results = service.lookup("state")
        assert [s.title for s in results] == ["Remote State", "Migrating State"]

    def test_list_all_in_document_order(self):
        service = _service(GUIDE)
        assert [s.title for s in service.list_all()] == [
            "Remote State",
            "S3 Backend",
            "Workspaces",
            "Migrating State",
        ]

    def test_list_all_returns_copy(self):
        service = _service(GUIDE)
        service.list_all().clear()
        assert len(service.list_all()) == 4

    def test_get_by_title(self):
        service = _service(GUIDE)
        assert service.get("s3 backend").title == "S3 Backend"
        assert service.get("Missing") is None
        assert service.get("") is None

    def test_stats(self):
        service = _service(GUIDE)
        assert service.stats() == {
            "sections": 4,
            "keywords": len(service.keywords()),
            "code_blocks": 3,
            "rejected": 0,
        }

    def test_shared_service_across_threads(self):
        service = _service(GUIDE)
        expected_lookup = service.lookup("state")
        expected_listing = service.list_all()

        with ThreadPoolExecutor(max_workers=8) as pool:
            lookups = list(pool.map(lambda _: service.lookup("state"), range(64)))
            listings = list(pool.map(lambda _: service.list_all(), range(64)))

        assert all(result == expected_lookup for result in lookups)
        assert all(result == expected_listing for result in listings)
        assert [s.title for s in expected_lookup] == ["Remote State", "Migrating State"]
