from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from src.create import __version__
from src.create.context import CreateContext, CreateInputs
from src.create.errors import Failure
from src.create.pipeline import PipelineOutcome, PipelineStep, run_pipeline
from src.create.ports import (
    CommandRunner,
    ConfigStore,
    FileSystem,
    NativePlatforms,
    Prompter,
    StepReporter,
)
from src.create.resolver import resolve_inputs
from src.create.step_runner import run_step
from src.create.validation import checks_for, run_checks
from src.create.workspace import provision
from src.platforms.targets import bootstrap_platforms, platform_targets
from src.project_config.types import CONFIG_FILE_NAME, ProjectConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateDeps:
    fs: FileSystem
    prompter: Prompter
    config_store: ConfigStore
    runner: CommandRunner
    native: NativePlatforms
    reporter: StepReporter


async def validate_stage(ctx: CreateContext, deps: CreateDeps) -> CreateContext | Failure:
    failure = await run_checks(ctx.config, checks_for(ctx.inputs, deps.fs, only_supplied=True))
    return failure or ctx


async def resolve_stage(ctx: CreateContext, deps: CreateDeps) -> CreateContext | Failure:
    deps.reporter.info(f"Welcome to capstan (CLI v{__version__})")
    resolved = await resolve_inputs(ctx.inputs, deps.prompter)
    # Prompted values go through the same checks before anything touches disk.
    failure = await run_checks(ctx.config, checks_for(resolved, deps.fs, only_supplied=False))
    if failure is not None:
        return failure
    ctx.resolved = resolved
    return ctx


async def provision_stage(ctx: CreateContext, deps: CreateDeps) -> CreateContext | Failure:
    app_dir = ctx.require_resolved().app_dir
    res = await run_step(
        deps.reporter, f"Creating directory {app_dir}", lambda: provision(deps.fs, app_dir)
    )
    if isinstance(res, Failure):
        return res
    ctx.config.working_dir = app_dir
    return ctx


async def materialize_stage(ctx: CreateContext, deps: CreateDeps) -> CreateContext | Failure:
    resolved = ctx.require_resolved()
    config = ctx.config
    config.app_name = resolved.app_name
    config.app_id = resolved.app_id
    config.bundled_web_runtime = True

    res = await run_step(
        deps.reporter,
        f"Writing {CONFIG_FILE_NAME}",
        lambda: deps.config_store.get_or_create(config),
    )
    if isinstance(res, Failure):
        return res
    return ctx


async def template_stage(ctx: CreateContext, deps: CreateDeps) -> CreateContext | Failure:
    config = ctx.config
    res = await run_step(
        deps.reporter,
        f"Creating app {config.app_name} in {config.working_dir} with id {config.app_id}",
        lambda: deps.fs.copy_tree(config.template_dir, config.working_dir),
    )
    if isinstance(res, Failure):
        return res

    if config.skip_install:
        deps.reporter.skip("Installing dependencies", "CAPSTAN_SKIP_INSTALL is set")
        return ctx

    cmd = [config.npm_client, "install", "--save", *config.install_packages]
    res = await run_step(
        deps.reporter,
        "Installing dependencies",
        lambda: deps.runner.run(cmd, cwd=config.working_dir),
    )
    if isinstance(res, Failure):
        return res
    return ctx


async def bootstrap_stage(ctx: CreateContext, deps: CreateDeps) -> CreateContext | Failure:
    failure = await bootstrap_platforms(ctx.config, platform_targets(deps.native), deps.reporter)
    return failure or ctx


def render_next_steps(config: ProjectConfig) -> list[str]:
    return [
        "Your app is ready!",
        "",
        "Next steps:",
        f"cd ./{Path(config.working_dir).name}",
        f"Get to work by following the capstan development workflow: {config.docs_url}",
    ]


async def report_stage(ctx: CreateContext, deps: CreateDeps) -> CreateContext | Failure:
    deps.reporter.summary(render_next_steps(ctx.config))
    return ctx


def build_create_steps(deps: CreateDeps) -> list[PipelineStep]:
    return [
        PipelineStep("validating", "Validate arguments", partial(validate_stage, deps=deps)),
        PipelineStep("resolving", "Resolve missing inputs", partial(resolve_stage, deps=deps)),
        PipelineStep("provisioning", "Create app directory", partial(provision_stage, deps=deps)),
        PipelineStep("materializing", "Write app config", partial(materialize_stage, deps=deps)),
        PipelineStep("templating", "Copy template and install", partial(template_stage, deps=deps)),
        PipelineStep("bootstrapping", "Add native platforms", partial(bootstrap_stage, deps=deps)),
        PipelineStep("reporting", "Print next steps", partial(report_stage, deps=deps)),
    ]


async def create_app(
    inputs: CreateInputs,
    deps: CreateDeps,
    *,
    config: ProjectConfig | None = None,
) -> PipelineOutcome:
    ctx = CreateContext(inputs=inputs, config=config or ProjectConfig.from_env())
    return await run_pipeline(ctx, build_create_steps(deps))
