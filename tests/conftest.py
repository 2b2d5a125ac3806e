import pytest
from pathlib import Path
from unittest.mock import patch
from click.testing import CliRunner
from gitget.fetchers import StepResult


class FakeBackend:
    """In-memory stand-in for the git executable.

    *files* maps repository paths to content for every branch in *branches*.
    Checkout materializes only the files under the configured sparse subpath.
    """

    def __init__(self, files=None, branches=("main",), fail_step=None, diagnostic="boom"):
        self.files = dict(files or {})
        self.branches = set(branches)
        self.fail_step = fail_step
        self.diagnostic = diagnostic
        self.calls: list[str] = []
        self.workdirs: list[Path] = []
        self.remote = None
        self.sparse = None
        self.fetched = None

    def _step(self, name):
        self.calls.append(name)
        if name == self.fail_step:
            return StepResult(name, False, self.diagnostic)
        return None

    def init(self, workdir):
        self.workdirs.append(workdir)
        failed = self._step("init")
        if failed:
            return failed
        (workdir / ".git").mkdir()
        return StepResult("init", True)

    def add_remote(self, workdir, url):
        self.remote = url
        return self._step("remote add") or StepResult("remote add", True)

    def configure_sparse(self, workdir, subpath):
        self.sparse = subpath
        return self._step("sparse-checkout") or StepResult("sparse-checkout", True)

    def fetch(self, workdir, branch):
        failed = self._step("fetch")
        if failed:
            return failed
        if branch not in self.branches:
            return StepResult("fetch", False, f"fatal: couldn't find remote ref {branch}")
        self.fetched = branch
        return StepResult("fetch", True)

    def checkout(self, workdir, branch):
        failed = self._step("checkout")
        if failed:
            return failed
        prefix = self.sparse + "/"
        for rel, content in self.files.items():
            if not rel.startswith(prefix):
                continue
            path = workdir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return StepResult("checkout", True)


WIDGETS = {
    "README.md": "top-level readme",
    "examples/basic/main.py": "print('basic')\n",
    "examples/basic/data/input.txt": "1 2 3\n",
    "examples/basic/.git/HEAD": "ref: refs/heads/main\n",
    "examples/advanced/main.py": "print('advanced')\n",
    "src/widgets.py": "WIDGETS = []\n",
}


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Point the settings file at an empty location and clear overrides."""
    cfg_dir = tmp_path_factory.mktemp("cfg")
    monkeypatch.setenv("GITGET_CONFIG", str(cfg_dir / "config.toml"))
    for var in ("GITGET_HOST", "GITGET_GIT", "GITGET_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    return cfg_dir / "config.toml"


@pytest.fixture
def runner():
    """Click CLI runner fixture."""
    return CliRunner()


@pytest.fixture
def fake_backend():
    """Fake backend serving the acme/widgets fixture tree on branch main."""
    return FakeBackend(WIDGETS)


@pytest.fixture
def use_backend(fake_backend):
    """Route the CLI's default_backend() to the fake backend."""
    with patch("gitget.fetchers.default_backend", return_value=fake_backend) as mock:
        yield mock
