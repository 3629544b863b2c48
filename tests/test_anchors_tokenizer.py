"""Tests for anchor extraction and keyword tokenization."""

import pytest

from refindex.knowledge.anchors import (
    command_anchor,
    extract_anchors,
    hcl_anchors,
    split_shell_commands,
)
from refindex.knowledge.models import CodeBlock
from refindex.knowledge.stopwords import is_stopword
from refindex.knowledge.tokenizer import TextTokenizer


# ── split_shell_commands ────────────────────────────────────────


class TestSplitShellCommands:
    def test_basic_split(self):
        assert split_shell_commands("terraform init\nterraform plan") == [
            "terraform init",
            "terraform plan",
        ]

    def test_comments_and_blank_lines_skipped(self):
        text = "# set up\n\nterraform init\n   \n# done\n"
        assert split_shell_commands(text) == ["terraform init"]

    def test_prompts_removed(self):
        assert split_shell_commands("$ terraform init\n$ terraform apply") == [
            "terraform init",
            "terraform apply",
        ]

    def test_backslash_continuation(self):
        text = "terraform plan \\\n  -var region=us-east-1 \\\n  -out=tfplan\nterraform apply tfplan"
        assert split_shell_commands(text) == [
            "terraform plan -var region=us-east-1 -out=tfplan",
            "terraform apply tfplan",
        ]

    def test_continuation_at_end(self):
        assert split_shell_commands("terraform plan \\") == ["terraform plan"]

    def test_require_prompt_skips_output(self):
        text = "$ terraform workspace list\n  default\n* staging\n"
        assert split_shell_commands(text, require_prompt=True) == ["terraform workspace list"]


# ── command_anchor / hcl_anchors ────────────────────────────────


class TestCommandAnchor:
    @pytest.mark.parametrize(
        "command, anchor",
        [
            ("terraform init", "terraform init"),
            ("terraform apply -auto-approve", "terraform apply"),
            ("terraform -chdir=infra plan", "terraform plan"),
            ("sudo apt-get install terraform", "apt-get install"),
            ("TF_LOG=debug terraform workspace new dev", "terraform workspace"),
            ("/usr/local/bin/terraform fmt -recursive", "terraform fmt"),
            ("terraform version | head -1", "terraform version"),
            ("ls", "ls"),
            ("terraform apply 'my plan'", "terraform apply"),
        ],
    )
    def test_anchor(self, command, anchor):
        assert command_anchor(command) == anchor

    def test_non_command_returns_none(self):
        assert command_anchor("FOO=bar") is None
        assert command_anchor("123 go") is None
        assert command_anchor("sudo") is None

    def test_script_path_reduced_to_name(self):
        assert command_anchor("./scripts/bootstrap.sh") == "bootstrap.sh"

    def test_unbalanced_quotes_fall_back_to_whitespace_split(self):
        assert command_anchor('echo "unterminated') == "echo"


class TestHclAnchors:
    def test_labelled_blocks(self):
        content = (
            'terraform {\n'
            '  backend "s3" {\n'
            '    bucket = "state"\n'
            '  }\n'
            '}\n'
            'resource "aws_s3_bucket" "state" {\n'
            '}\n'
        )
        assert hcl_anchors(content) == ["backend s3", "resource aws_s3_bucket"]

    def test_unlabelled_and_attribute_lines_ignored(self):
        assert hcl_anchors('locals {\n  name = "x"\n}\n') == []


class TestExtractAnchors:
    def test_mixed_languages(self):
        blocks = [
            CodeBlock("sh", "terraform init\n"),
            CodeBlock("hcl", 'backend "gcs" {\n}\n'),
            CodeBlock("python", "import os\n"),
            CodeBlock("", "$ terraform output\n"),
            CodeBlock("", "not a prompt line\n"),
            CodeBlock("console", "$ terraform show\nNo state.\n"),
        ]
        assert extract_anchors(blocks) == frozenset(
            {"terraform init", "backend gcs", "terraform output", "terraform show"}
        )

    def test_no_blocks(self):
        assert extract_anchors([]) == frozenset()


# ── TextTokenizer ───────────────────────────────────────────────


class TestTextTokenizer:
    def setup_method(self):
        self.tokenizer = TextTokenizer()

    def test_lowercases_and_drops_stopwords(self):
        assert self.tokenizer.tokenize("Configure the S3 Backend") == ["configure", "s3", "backend"]

    def test_splits_identifiers(self):
        assert self.tokenizer.tokenize("aws_s3_bucket") == ["aws", "s3", "bucket"]
        assert self.tokenizer.tokenize("force-unlock") == ["force", "unlock"]
        assert self.tokenizer.tokenize("global/s3/terraform.tfstate") == [
            "global",
            "s3",
            "terraform",
            "tfstate",
        ]

    def test_camel_case(self):
        assert self.tokenizer.tokenize("DynamoDBTable") == ["dynamo", "db", "table"]
        assert self.tokenizer.tokenize("HCL") == ["hcl"]

    def test_numbers_kept(self):
        assert self.tokenizer.tokenize("Upgrade to 1.5") == ["upgrade", "1.5"]

    def test_short_words_dropped(self):
        assert self.tokenizer.tokenize("a b cd") == ["cd"]

    def test_command_verbs_preserved(self):
        assert self.tokenizer.tokenize("Apply and Import") == ["apply", "import"]

    def test_empty(self):
        assert self.tokenizer.tokenize("") == []
        assert self.tokenizer.tokenize("the of and") == []

    def test_normalize_query(self):
        assert TextTokenizer.normalize_query("  Terraform   Init ") == "terraform init"


def test_is_stopword_case_insensitive():
    assert is_stopword("The")
    assert not is_stopword("Apply")
    assert not is_stopword("backend")
