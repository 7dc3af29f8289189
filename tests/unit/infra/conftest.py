import shutil

import pytest

# aws_cdk は jsii 経由で Node.js を起動するため、どちらかが無ければ収集しない
collect_ignore_glob: list[str] = []
if shutil.which("node") is None:
    collect_ignore_glob.append("*.py")
else:
    try:
        import aws_cdk  # noqa: F401
    except ImportError:
        collect_ignore_glob.append("*.py")


@pytest.fixture
def repository_root(request) -> str:
    return str(request.config.rootpath)
