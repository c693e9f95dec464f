import json
import tempfile
import unittest
from pathlib import Path

from pages_deployer.config import DeploymentConfig, load_config, str_to_bool


class ConfigTests(unittest.TestCase):
    def test_defaults_without_file_or_environment(self) -> None:
        config = load_config(environ={})
        self.assertIsInstance(config, DeploymentConfig)
        self.assertIsNone(config.folder)
        self.assertEqual(config.default_branch, "master")
        self.assertEqual(config.root, ".")
        self.assertFalse(config.clean)
        self.assertEqual(config.name, "GitHub Pages Deploy Action")
        self.assertEqual(config.email, "nobody@github.com")

    def test_action_inputs_are_read_from_environment(self) -> None:
        config = load_config(
            environ={
                "INPUT_FOLDER": "build",
                "INPUT_BRANCH": "gh-pages",
                "INPUT_BASE_BRANCH": "main",
                "INPUT_CLEAN": "true",
                "INPUT_CLEAN_EXCLUDE": '["keepme.txt"]',
                "INPUT_TARGET_FOLDER": "docs",
                "INPUT_SSH": "false",
                "INPUT_ACCESS_TOKEN": "secret",
                "GITHUB_WORKSPACE": "/github/workspace",
                "GITHUB_REPOSITORY": "octo/site",
            }
        )
        self.assertEqual(config.folder, "build")
        self.assertEqual(config.branch, "gh-pages")
        self.assertEqual(config.base_branch, "main")
        self.assertTrue(config.clean)
        self.assertEqual(config.clean_exclude, '["keepme.txt"]')
        self.assertEqual(config.target_folder, "docs")
        self.assertFalse(config.ssh)
        self.assertEqual(config.access_token, "secret")
        self.assertEqual(config.workspace, "/github/workspace")
        self.assertEqual(config.repository_name, "octo/site")
        self.assertEqual(config.secrets, ["secret"])

    def test_triggering_commit_sets_default_branch_and_sha(self) -> None:
        config = load_config(environ={"GITHUB_SHA": "abc123"})
        self.assertEqual(config.commit_sha, "abc123")
        self.assertEqual(config.default_branch, "abc123")

    def test_repository_name_input_wins_over_context(self) -> None:
        config = load_config(
            environ={"INPUT_REPOSITORY_NAME": "octo/other", "GITHUB_REPOSITORY": "octo/site"}
        )
        self.assertEqual(config.repository_name, "octo/other")

    def test_server_url_is_reduced_to_host(self) -> None:
        config = load_config(environ={"GITHUB_SERVER_URL": "https://git.example.com/"})
        self.assertEqual(config.github_server, "git.example.com")

    def test_author_falls_back_to_actor(self) -> None:
        config = load_config(environ={"GITHUB_ACTOR": "octocat"})
        self.assertEqual(config.name, "octocat")
        self.assertEqual(config.email, "octocat@users.noreply.github.com")

    def test_author_read_from_event_pusher(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            event = Path(tmp) / "event.json"
            event.write_text(
                json.dumps({"pusher": {"name": "Mona", "email": "mona@example.com"}}),
                encoding="utf-8",
            )
            config = load_config(
                environ={"GITHUB_EVENT_PATH": str(event), "GITHUB_ACTOR": "octocat"}
            )
        self.assertEqual(config.name, "Mona")
        self.assertEqual(config.email, "mona@example.com")

    def test_explicit_author_inputs_win(self) -> None:
        config = load_config(
            environ={
                "INPUT_GIT_CONFIG_NAME": "Deploy Bot",
                "INPUT_GIT_CONFIG_EMAIL": "bot@example.com",
                "GITHUB_ACTOR": "octocat",
            }
        )
        self.assertEqual(config.name, "Deploy Bot")
        self.assertEqual(config.email, "bot@example.com")

    def test_loads_json_file_and_environment_overrides_it(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(
                json.dumps(
                    {
                        "_comment": "ignored",
                        "folder": "dist",
                        "branch": "pages",
                        "clean": True,
                        "clean_exclude": ["keep.txt"],
                    }
                ),
                encoding="utf-8",
            )
            config = load_config(str(path), environ={"INPUT_BRANCH": "gh-pages"})
        self.assertEqual(config.folder, "dist")
        self.assertEqual(config.branch, "gh-pages")
        self.assertTrue(config.clean)
        self.assertEqual(config.clean_exclude, ["keep.txt"])

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            DeploymentConfig.from_dict({"folder": "build", "bogus": 1})

    def test_missing_explicit_file_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config("does/not/exist.json", environ={})

    def test_str_to_bool(self) -> None:
        for value in ("true", "TRUE", "1", "yes", " on "):
            self.assertTrue(str_to_bool(value), value)
        for value in ("false", "0", "", "no", None):
            self.assertFalse(str_to_bool(value), value)
        self.assertTrue(str_to_bool(True))


if __name__ == "__main__":
    unittest.main()
