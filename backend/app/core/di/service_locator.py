from typing import Optional

from app.core.config.environment_config import EnvironmentConfig
from app.core.utils.logger import get_logger
from app.data.adapters.gemini_caption_client import GeminiCaptionClient, GeminiCaptionConfig
from app.data.repositories.caption_history_repository_impl import InMemoryCaptionHistoryRepository
from app.data.repositories.caption_repository_impl import CaptionRepositoryImpl
from app.domain.repositories.caption_history_repository import CaptionHistoryRepository
from app.domain.repositories.caption_repository import CaptionRepository
from app.domain.services.caption_parser import CaptionParser
from app.domain.usecases.caption_history_usecase import CaptionHistoryUseCase
from app.domain.usecases.generate_caption_usecase import GenerateCaptionUseCase
from app.domain.usecases.parse_caption_usecase import ParseCaptionUseCase
from app.domain.usecases.request_caption_usecase import RequestCaptionUseCase


_logger = get_logger("service_locator")


class ServiceLocator:
    """Builds and caches the object graph of one application instance.

    The configuration is resolved by the caller and handed in; nothing here reads
    the environment. Collaborators can be overridden through the constructor
    (tests pass a fake caption repository).
    """

    def __init__(
        self,
        config: EnvironmentConfig,
        caption_repo: Optional[CaptionRepository] = None,
        history_repo: Optional[CaptionHistoryRepository] = None,
    ) -> None:
        self._config = config
        self._gemini_client: Optional[GeminiCaptionClient] = None
        self._caption_repo = caption_repo
        self._history_repo = history_repo
        self._parser: Optional[CaptionParser] = None
        self._request_usecase: Optional[RequestCaptionUseCase] = None
        self._generate_usecase: Optional[GenerateCaptionUseCase] = None
        self._parse_usecase: Optional[ParseCaptionUseCase] = None
        self._history_usecase: Optional[CaptionHistoryUseCase] = None
        _logger.info(
            "[config] APP_ENV=%s GEMINI_MODEL=%s GEMINI_API_KEY=%s MOCK_CAPTION=%s",
            config.app_env,
            config.gemini_model,
            "SET" if config.gemini_api_key else "MISSING",
            config.mock_caption,
        )

    def config(self) -> EnvironmentConfig:
        return self._config

    def gemini_client(self) -> GeminiCaptionClient:
        if self._gemini_client is None:
            cfg = self._config
            client_cfg = GeminiCaptionConfig(
                api_key=cfg.gemini_api_key,
                model=cfg.gemini_model,
                base_url=cfg.gemini_api_base,
                timeout=cfg.gemini_timeout,
                mock=cfg.mock_caption,
            )
            self._gemini_client = GeminiCaptionClient(config=client_cfg)
        return self._gemini_client

    def caption_repo(self) -> CaptionRepository:
        if self._caption_repo is None:
            self._caption_repo = CaptionRepositoryImpl(client=self.gemini_client())
        return self._caption_repo

    def history_repo(self) -> CaptionHistoryRepository:
        if self._history_repo is None:
            self._history_repo = InMemoryCaptionHistoryRepository(limit=self._config.caption_history_limit)
        return self._history_repo

    def caption_parser(self) -> CaptionParser:
        if self._parser is None:
            self._parser = CaptionParser(max_sentences=self._config.caption_max_sentences)
        return self._parser

    def request_caption_usecase(self) -> RequestCaptionUseCase:
        if self._request_usecase is None:
            self._request_usecase = RequestCaptionUseCase(repository=self.caption_repo())
        return self._request_usecase

    def generate_caption_usecase(self) -> GenerateCaptionUseCase:
        if self._generate_usecase is None:
            self._generate_usecase = GenerateCaptionUseCase(
                request_usecase=self.request_caption_usecase(),
                parser=self.caption_parser(),
                history=self.history_repo(),
            )
        return self._generate_usecase

    def parse_caption_usecase(self) -> ParseCaptionUseCase:
        if self._parse_usecase is None:
            self._parse_usecase = ParseCaptionUseCase(parser=self.caption_parser())
        return self._parse_usecase

    def caption_history_usecase(self) -> CaptionHistoryUseCase:
        if self._history_usecase is None:
            self._history_usecase = CaptionHistoryUseCase(repository=self.history_repo())
        return self._history_usecase

    def warm_up(self) -> None:
        """Build every use case up front so request threads only read cached objects."""
        self.request_caption_usecase()
        self.generate_caption_usecase()
        self.parse_caption_usecase()
        self.caption_history_usecase()
