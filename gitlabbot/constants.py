import os

# Configurações globais de ambiente
CONFIG_FILE = os.getenv("CONFIG_FILE", "config.json")
BIND_HOST = os.getenv("BIND_HOST", "0.0.0.0")
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Portas padrão dos listeners (push, merge request, build)
DEFAULT_PUSH_PORT = 8100
DEFAULT_MERGE_PORT = 8200
DEFAULT_BUILD_PORT = 8300

# Slack
DEFAULT_SLACK_API_BASE = "https://slack.com/api"
DEFAULT_HTTP_TIMEOUT_SECONDS = 10
CHANNEL_NAME_MAX = 21  # limite de tamanho de nome de canal no Slack

# Quebra de linha já codificada: o texto vai dentro de um campo form-urlencoded
LINE_BREAK = "%5Cn"

# Ex.: 18 Nov 14 14:34
DATE_FORMAT = "%d %b %y %H:%M"
