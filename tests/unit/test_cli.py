"""
Unit tests for the browse CLI command dispatch.
"""
import argparse
import asyncio
import json

from smartshop.cli.browse import _dump, _run


class TestBrowseCommands:

    def test_featured(self, repository):
        result = asyncio.run(_run(repository, argparse.Namespace(command="featured")))
        apps = json.loads(_dump(result.value))
        assert [a["id"] for a in apps] == ["app-4", "app-1", "app-2"]

    def test_ranking_by_rating(self, repository):
        args = argparse.Namespace(command="ranking", type="RATING", page=1, page_size=2)
        result = asyncio.run(_run(repository, args))
        assert result.value.page_size == 2
        assert json.loads(_dump(result.value))["items"][1]["id"] == "app-1"

    def test_check_update(self, repository):
        args = argparse.Namespace(command="check-update", current_version="1.0.0")
        result = asyncio.run(_run(repository, args))
        assert _dump(result.value) == "true"

    def test_failure_is_reported_in_result(self, repository):
        result = asyncio.run(_run(repository, argparse.Namespace(command="app", app_id="missing")))
        assert not result.is_ok
