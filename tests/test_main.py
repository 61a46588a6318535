"""Tests for the command line entry points."""

import argparse
import json

import pytest

import pipeline as pipeline_module
from conftest import wiki_url
from errors import NotFoundError
from main import cmd_status, cmd_summarize
from models.api import SummaryResponse


class StubPipeline:
    """Pipeline answering every single-article request with a fixed guide."""

    def __init__(self, config):
        self.config = config

    async def summarize_single(self, url, length):
        if url.endswith("Missing"):
            raise NotFoundError('Article "Missing" not found')
        return SummaryResponse(summary="## Guide", title="Cat", original_url=url, length=length, word_count=2)


@pytest.fixture
def stub_pipeline(monkeypatch):
    monkeypatch.setattr(pipeline_module, "StudyGuidePipeline", StubPipeline)


class TestStatus:

    def test_secrets_are_not_printed(self, config, capsys):
        config.openrouter_api_key = "sk-or-secret"
        assert cmd_status(argparse.Namespace(), config) == 0

        output = capsys.readouterr().out
        assert "sk-or-secret" not in output
        assert json.loads(output)["llm"]["api_key"] == "set"


class TestSummarize:

    def test_prints_camel_case_json(self, config, capsys, stub_pipeline):
        args = argparse.Namespace(url=[wiki_url("Cat")], length="short")

        assert cmd_summarize(args, config) == 0

        body = json.loads(capsys.readouterr().out)
        assert body["originalUrl"] == wiki_url("Cat")
        assert body["wordCount"] == 2

    def test_error_goes_to_stderr(self, config, capsys, stub_pipeline):
        args = argparse.Namespace(url=[wiki_url("Missing")], length="short")

        assert cmd_summarize(args, config) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err) == {"error": 'Article "Missing" not found', "code": "ARTICLE_NOT_FOUND"}
