"""アプリケーションのエントリポイント"""

import asyncio
import logging
import sys
from pathlib import Path

from smartctx.application.services import ConversationMemoryEngine, PersonaService
from smartctx.config import ConfigError, LoggingConfig, load_config
from smartctx.domain.entities import Persona, Role
from smartctx.domain.exceptions import MemoryEngineError
from smartctx.domain.services import PersonaRegistry, PromptAssembler, ReplyGenerator
from smartctx.infrastructure.llm import (
    LiteLLMReplyGenerator,
    LLMClient,
    LLMError,
    LLMSummarizer,
)
from smartctx.infrastructure.persistence import (
    DatabaseManager,
    SQLiteMemoryRepository,
    SQLiteMessageRepository,
    SQLitePersonaRepository,
)

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CONVERSATION_ID = "console"

HELP_TEXT = """\
/personas              list personas
/persona <id>          activate a persona (/persona - to clear)
/addpersona <id> <name> [description]
/delpersona <id>       delete a persona
/memory                show long-term memory
/prompt                show the assembled prompt
/reset                 forget memory and history
/quit                  exit"""


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()
    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


async def handle_command(
    line: str,
    engine: ConversationMemoryEngine,
    personas: PersonaService,
) -> bool:
    """Run a slash command.

    Returns:
        False when the session should end.
    """
    command, _, rest = line.partition(" ")
    args = rest.split(maxsplit=2)

    if command == "/quit":
        return False
    if command == "/personas":
        active = personas.get_active()
        for persona in personas.list():
            marker = "*" if active and active.id == persona.id else " "
            print(f"{marker} {persona.id}: {persona.name} {persona.description}")
    elif command == "/persona" and args:
        await personas.set_active(None if args[0] == "-" else args[0])
    elif command == "/addpersona" and len(args) >= 2:
        description = args[2] if len(args) > 2 else ""
        await personas.upsert(Persona(id=args[0], name=args[1], description=description))
    elif command == "/delpersona" and args:
        await personas.delete(args[0])
    elif command == "/memory":
        for entry in engine.ledger(CONVERSATION_ID):
            print(
                f"[{entry.source_range_start}-{entry.source_range_end}] "
                f"{entry.summary_text}"
            )
    elif command == "/prompt":
        print(engine.build_prompt(CONVERSATION_ID))
    elif command == "/reset":
        await engine.reset_memory(CONVERSATION_ID)
    else:
        print(HELP_TEXT)
    return True


async def chat(
    engine: ConversationMemoryEngine,
    personas: PersonaService,
    reply_generator: ReplyGenerator,
) -> None:
    """Read user input from the console and reply until /quit."""
    print(HELP_TEXT)
    while True:
        try:
            line = (await asyncio.to_thread(input, "> ")).strip()
        except EOFError:
            break
        if not line:
            continue

        if line.startswith("/"):
            try:
                if not await handle_command(line, engine, personas):
                    break
            except (MemoryEngineError, ValueError) as e:
                print(f"error: {e}")
            continue

        context = engine.build_prompt(CONVERSATION_ID)
        await engine.post_message(CONVERSATION_ID, Role.USER, line)
        try:
            reply = await reply_generator.generate(context, line)
        except LLMError as e:
            logger.error("Failed to generate reply: %s", e)
            continue
        print(reply)
        await engine.post_message(CONVERSATION_ID, Role.ASSISTANT, reply)


async def main() -> None:
    """アプリケーションを起動する"""
    config_path = Path("config.yaml")
    if not config_path.exists():
        logger.error("config.yaml not found")
        sys.exit(1)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    configure_logging(config.logging)

    # Initialize database
    db_manager = DatabaseManager(config.memory.database_path)
    await db_manager.create_tables()

    persona_repository = SQLitePersonaRepository(db_manager.get_session)
    message_repository = SQLiteMessageRepository(db_manager.get_session)
    memory_repository = SQLiteMemoryRepository(db_manager.get_session)

    registry = PersonaRegistry()
    persona_service = PersonaService(
        registry, persona_repository, default_persona=config.default_persona
    )
    await persona_service.load()

    # Use summarizer LLM config if available, otherwise use default
    llm_client = LLMClient(config.llm["default"])
    summarizer_client = LLMClient(config.llm.get("summarizer", config.llm["default"]))
    summarizer = LLMSummarizer(summarizer_client, character_name=config.character.name)

    engine = ConversationMemoryEngine(
        registry,
        summarizer,
        prompt_assembler=PromptAssembler(character_name=config.character.name),
        message_repository=message_repository,
        memory_repository=memory_repository,
    )
    await engine.open_conversation(CONVERSATION_ID, config.context, skip_backlog=True)

    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    reply_generator = LiteLLMReplyGenerator(
        llm_client,
        config.character,
        debug_llm_messages=debug_llm_messages,
    )

    logger.info("Starting %s with %s...", config.character.name, llm_client.model)
    try:
        await chat(engine, persona_service, reply_generator)
    finally:
        logger.info("Shutting down...")
        await engine.wait_idle()
        await db_manager.close()
        logger.info("Shutdown complete")


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
