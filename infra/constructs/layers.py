import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

# Lambda 関数と Layer で共通のランタイム
RUNTIME = _lambda.Runtime.PYTHON_3_14

COMMON_LAYER_PATH = "layers/common_layer"


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """requirements.txt をローカルの uv / pip で python/ 配下にインストールする

    どちらも使えなければ False を返し、CDK の Docker バンドリングに任せる。
    """

    INSTALLERS: tuple[tuple[str, ...], ...] = (
        ("uv", "pip", "install", "-r", "{requirements}", "--target", "{target}"),
        ("pip", "install", "-r", "{requirements}", "-t", "{target}"),
    )

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        del options  # unused
        requirements_path = Path(self.source_path) / "requirements.txt"
        target_dir = Path(output_dir) / "python"

        if not requirements_path.exists():
            logger.warning("requirements.txt not found: %s", requirements_path)
            return False

        for template in self.INSTALLERS:
            command = [
                part.format(requirements=requirements_path, target=target_dir)
                for part in template
            ]
            if self._run(command):
                return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    def _run(self, command: list[str]) -> bool:
        tool = command[0]
        try:
            logger.info("Trying local bundling with %s...", tool)
            subprocess.run([*command, "--quiet"], check=True)
        except FileNotFoundError:
            logger.debug("%s not found", tool)
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", tool, e)
            return False
        logger.info("Local bundling with %s succeeded", tool)
        return True


class Layers(Construct):
    """Lambda Layers Construct

    Powertools と pydantic を全関数で共有する Layer にまとめる。
    """

    def __init__(
        self, scope: Construct, id: str, source_path: str = COMMON_LAYER_PATH
    ) -> None:
        super().__init__(scope, id)

        self.common_layer = _lambda.LayerVersion(
            self,
            "CommonLayer",
            code=_lambda.Code.from_asset(
                source_path,
                bundling=BundlingOptions(
                    image=RUNTIME.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(source_path),
                ),
            ),
            compatible_runtimes=[RUNTIME],
            description="AeroFlow common dependencies (Powertools, pydantic)",
        )
