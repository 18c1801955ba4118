import argparse
import logging
import sys

from gitlabbot.config import load_config
from gitlabbot.constants import CONFIG_FILE, DEBUG_MODE
from gitlabbot.controller import serve_forever
from gitlabbot.dedupe import BuildGuard
from gitlabbot.errors import ConfigError
from gitlabbot.services import Notifier

logger = logging.getLogger("gitlabbot")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Relay de webhooks do GitLab para o Slack")
    parser.add_argument("-f", "--config", default=CONFIG_FILE, help="Arquivo de configuração")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if DEBUG_MODE else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.critical("Erro de configuração: %s", exc)
        return 1

    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    notifier = Notifier(config)
    guard = BuildGuard(per_repository=config.dedup_per_repository)

    notifier.announce_start()
    if config.bot_start_message:
        logger.info(config.bot_start_message)

    try:
        serve_forever(config, notifier, guard)
    except KeyboardInterrupt:
        logger.info("Encerrando listeners")
    return 0


if __name__ == '__main__':
    sys.exit(main())
