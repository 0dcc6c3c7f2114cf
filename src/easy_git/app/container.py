from __future__ import annotations

from dependency_injector import containers, providers

from ..core.ports import DefaultStateGenerator
from ..core.services import OAuthLoginFlow, RevertPipeline
from ..core.usecases.github import ListCommitsUseCase, ListReposUseCase, ShowCommitUseCase, WhoAmIUseCase
from ..core.usecases.oauth_login import OAuthLoginUseCase
from ..core.usecases.revert_in_place import RevertInPlaceUseCase
from ..core.usecases.revert_temp_clone import RevertTempCloneUseCase
from ..infra.browser import SystemBrowser
from ..infra.credentials import EnvCredentialProvider
from ..infra.github_api import GitHubAPI
from ..infra.logging import AppLogger
from ..infra.loopback import LoopbackCallbackListener
from ..infra.process_runner import GitProcessRunner
from ..infra.token_exchange import GitHubTokenExchange
from ..infra.workspace import EphemeralWorkspace


class Container(containers.DeclarativeContainer):
    """DI container; load settings with ``config.from_pydantic(AppConfig())``."""

    config = providers.Configuration()

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        AppLogger,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        file_output=config.logging.file_output,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    # Adapters
    runner = providers.Singleton(GitProcessRunner, logger=logger)

    workspace = providers.Singleton(
        EphemeralWorkspace,
        scratch_dir=config.workspace.scratch_dir,
        logger=logger,
    )

    credentials = providers.Singleton(EnvCredentialProvider)

    listener = providers.Factory(
        LoopbackCallbackListener,
        host=config.oauth.host,
        port=config.oauth.port,
        logger=logger,
    )

    browser = providers.Singleton(SystemBrowser, logger=logger)

    token_exchange = providers.Factory(
        GitHubTokenExchange,
        logger=logger,
        token_url=config.oauth.token_url,
        timeout_s=config.oauth.timeout_s,
    )

    state_gen = providers.Singleton(DefaultStateGenerator)

    github_api = providers.Factory(
        GitHubAPI,
        token=config.github.token,
        api_url=config.github.api_url,
        timeout_s=config.github.timeout_s,
    )

    # Domain services
    revert_pipeline = providers.Factory(
        RevertPipeline,
        runner=runner,
        workspace=workspace,
        logger=logger,
    )

    oauth_flow = providers.Factory(
        OAuthLoginFlow,
        credentials=credentials,
        listener=listener,
        browser=browser,
        token_exchange=token_exchange,
        state_gen=state_gen,
        logger=logger,
        host=config.oauth.host,
        callback_path=config.oauth.callback_path,
        scope=config.oauth.scope,
        authorize_url=config.oauth.authorize_url,
    )

    # Use cases
    revert_in_place_uc = providers.Factory(
        RevertInPlaceUseCase,
        runner=runner,
        logger=logger,
    )

    revert_temp_clone_uc = providers.Factory(
        RevertTempCloneUseCase,
        pipeline=revert_pipeline,
    )

    oauth_login_uc = providers.Factory(
        OAuthLoginUseCase,
        flow=oauth_flow,
    )

    whoami_uc = providers.Factory(WhoAmIUseCase, github=github_api)
    list_repos_uc = providers.Factory(ListReposUseCase, github=github_api)
    list_commits_uc = providers.Factory(ListCommitsUseCase, github=github_api)
    show_commit_uc = providers.Factory(ShowCommitUseCase, github=github_api)
