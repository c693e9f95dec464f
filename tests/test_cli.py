import unittest
from unittest import mock

from pages_deployer import cli
from pages_deployer.workflow import DeploymentOutcome


class CLITests(unittest.TestCase):
    def test_flags_override_environment(self) -> None:
        parser = cli.build_parser()
        args = parser.parse_args(
            [
                "--workspace", "/work",
                "deploy",
                "--folder", "dist",
                "--branch", "pages",
                "--clean",
                "--clean-exclude", '["keep.txt"]',
                "--debug",
            ]
        )
        with mock.patch.dict("os.environ", {"INPUT_FOLDER": "build", "INPUT_BRANCH": "gh-pages"}, clear=True):
            context = cli._build_context(args)

        self.assertEqual(context.config.folder, "dist")
        self.assertEqual(context.config.branch, "pages")
        self.assertEqual(context.config.workspace, "/work")
        self.assertTrue(context.config.clean)
        self.assertEqual(context.config.clean_exclude, '["keep.txt"]')
        self.assertTrue(context.config.debug)
        self.assertFalse(context.config.ssh)

    def test_workspace_accepted_after_subcommand(self) -> None:
        parser = cli.build_parser()
        after = parser.parse_args(["deploy", "--workspace", "/work", "--folder", "dist"])
        before = parser.parse_args(["--workspace", "/other", "deploy"])

        self.assertEqual(after.workspace, "/work")
        self.assertEqual(before.workspace, "/other")

    def test_unset_flags_keep_environment(self) -> None:
        args = cli.build_parser().parse_args(["deploy"])
        with mock.patch.dict("os.environ", {"INPUT_FOLDER": "build", "INPUT_CLEAN": "true"}, clear=True):
            context = cli._build_context(args)

        self.assertEqual(context.config.folder, "build")
        self.assertTrue(context.config.clean)

    def test_exit_code_follows_outcome(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            with mock.patch.object(cli.DeploymentWorkflow, "run") as run:
                run.return_value = DeploymentOutcome(success=True, status="ok")
                self.assertEqual(cli.run_cli(["deploy", "--folder", "build"]), 0)
                run.return_value = DeploymentOutcome(success=False, status="failed")
                self.assertEqual(cli.run_cli(["deploy", "--folder", "build"]), 1)

    def test_command_is_required(self) -> None:
        with self.assertRaises(SystemExit):
            cli.build_parser().parse_args([])


if __name__ == "__main__":
    unittest.main()
