"""Tests for CLI interface."""

import json
import os
import tempfile

from click.testing import CliRunner

from navgen.generator.cli import cli

FILE_DIR = os.path.dirname(os.path.realpath(__file__))


def _write(directory, text):
    path = os.path.join(directory, "screens.nav")
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def describe_gen_command():
    def generates_navigator(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            result = runner.invoke(
                cli,
                ["gen", "-i", f"{FILE_DIR}/activities.nav", "-o", tmpdir],
            )
            expect(result.exit_code) == 0
            output_file = os.path.join(tmpdir, "com", "example", "navigation", "Navigator.java")
            with open(output_file) as f:
                content = f.read()
            expect("package com.example.navigation;" in content) == True
            expect("public static void startProfileActivity(" in content) == True
            expect("public static void startFriendsActivity(" in content) == True
            expect("activity.sessionId" in content) == False
            expect("activity.nickname" in content) == False

    def overrides_package(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            result = runner.invoke(
                cli,
                ["gen", "-i", f"{FILE_DIR}/activities.nav", "-o", tmpdir, "-p", "org.app"],
            )
            expect(result.exit_code) == 0
            expect(os.path.isfile(os.path.join(tmpdir, "org", "app", "Navigator.java"))) == True

    def rejects_malformed_package_override(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            result = runner.invoke(
                cli,
                ["gen", "-i", f"{FILE_DIR}/activities.nav", "-o", tmpdir, "-p", "org app"],
            )
            expect(result.exit_code) == 1
            expect("package name" in result.output) == True
            expect(os.listdir(tmpdir)) == []

    def fails_for_non_public_field_without_output(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            input_file = _write(
                tmpdir, "class X { @Required public int age; @Required String name; }"
            )
            out_dir = os.path.join(tmpdir, "out")
            result = runner.invoke(cli, ["gen", "-i", input_file, "-o", out_dir])
            expect(result.exit_code) == 1
            expect("X.name" in result.output) == True
            expect(os.path.exists(out_dir)) == False

    def honours_no_strict(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            input_file = _write(tmpdir, "class X { @Required public Object thing; }")
            strict = runner.invoke(cli, ["gen", "-i", input_file, "-o", tmpdir])
            expect(strict.exit_code) == 1
            relaxed = runner.invoke(cli, ["gen", "-i", input_file, "-o", tmpdir, "--no-strict"])
            expect(relaxed.exit_code) == 0

    def reports_validation_errors(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            input_file = _write(tmpdir, "options { colour = blue }")
            result = runner.invoke(cli, ["gen", "-i", input_file, "-o", tmpdir])
            expect(result.exit_code) == 1
            expect("Unknown option" in result.output) == True

    def fails_when_output_cannot_be_written(expect):
        runner = CliRunner()
        with tempfile.TemporaryDirectory() as tmpdir:
            blocked = os.path.join(tmpdir, "blocked")
            with open(blocked, "w", encoding="utf-8") as f:
                f.write("")
            result = runner.invoke(
                cli,
                ["gen", "-i", f"{FILE_DIR}/activities.nav", "-o", blocked],
            )
            expect(result.exit_code) == 1

    def fails_with_missing_input(expect):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["gen", "-i", "/nonexistent/file.nav", "-o", "/tmp/out"],
        )
        expect(result.exit_code) != 0

    def requires_all_options(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["gen", "-i", "x.nav"])
        expect(result.exit_code) != 0
        expect("Missing option" in result.output) == True


def describe_info_command():
    def prints_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-i", f"{FILE_DIR}/activities.nav", "--json"])
        expect(result.exit_code) == 0
        data = json.loads(result.output)
        expect(data["package"]) == "com.example.navigation"
        profile = data["classes"]["com.example.ProfileActivity"]
        expect(profile["launcher"]) == "startProfileActivity"
        expect([f["name"] for f in profile["fields"]]) == ["age", "name", "sessionId"]
        expect(profile["fields"][0]["accessor"]) == "getIntExtra"
        expect(profile["fields"][2]["bind"]) == False
        friends = data["classes"]["com.example.FriendsActivity"]
        expect(friends["fields"][0]["category"]) == "transferable_array"
        expect(friends["fields"][0]["cast"]) == True

    def prints_tables(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "-i", f"{FILE_DIR}/activities.nav"])
        expect(result.exit_code) == 0
        expect("com.example.ProfileActivity" in result.output) == True
        expect("getIntExtra" in result.output) == True


def describe_parse_command():
    def prints_declarations_as_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["parse", "-i", f"{FILE_DIR}/activities.nav"])
        expect(result.exit_code) == 0
        data = json.loads(result.output)
        expect(data["options"][0]) == {"name": "package", "value": "com.example.navigation"}
        expect(data["types"][0]["implements"]) == ["Parcelable"]
        profile = data["classes"][0]
        expect(profile["name"]) == "com.example.ProfileActivity"
        expect(profile["fields"][2]["modifiers"]) == ["private"]
        expect(profile["fields"][0]["type"]) == {"name": "int", "dims": 0, "args": []}


def describe_main_group():
    def shows_help(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        expect(result.exit_code) == 0
        expect("gen" in result.output) == True
        expect("info" in result.output) == True
        expect("parse" in result.output) == True
