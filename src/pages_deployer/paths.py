"""Reserved names used while staging a deployment.

The staging worktree and the temporary branch live inside the caller's
workspace for the duration of one run:
- <workspace>/gh-action-temp-deployment-folder/   # worktree of the target branch
- gh-action-temp-deployment-branch                # local branch holding the commit
"""

STAGING_DIR_NAME = "gh-action-temp-deployment-folder"
STAGING_BRANCH_NAME = "gh-action-temp-deployment-branch"

# Never synchronized in either direction
METADATA_EXCLUDES = (".git", ".github", ".ssh")

# Hosting configuration that clean never removes
PROTECTED_FILES = ("CNAME", ".nojekyll")

DEFAULT_CONFIG_PATH = ".pages-deployer.json"
