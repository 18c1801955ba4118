"""Relay de webhooks do GitLab (push, merge request, build) para o Slack.

Este pacote contém:
- constants: variáveis de ambiente e constantes do protocolo do Slack
- config: leitura do arquivo de configuração (bot, ícones, redirects)
- errors: exceções de configuração, decode e entrega
- events: modelos tipados dos payloads do GitLab
- formatters: montagem e codificação das mensagens
- channels: resolução do nome do canal (redirect, prefixo, corte)
- dedupe: guarda de build ids já notificados
- services: cliente da API do Slack
- controller: apps Flask dos três listeners e pipeline comum
"""
