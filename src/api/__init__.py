"""API — camada de borda.

Responsabilidades:
- Normalizar mensagens do cliente do protocolo para o modelo interno
- Construir o envelope entregue ao webhook de saída
- Expor endpoints HTTP de health e diagnóstico de identidade

Subpastas:
- normalizers/: conversão de payloads externos → modelos internos
- payload_builders/: construção de payloads para o webhook
- routes/: endpoints HTTP (health, identity)

NÃO PODE conter: IO de disco, regras de resolução de identidade, orquestração de use cases.
"""
