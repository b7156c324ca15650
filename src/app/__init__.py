"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: handlers dos eventos do cliente do protocolo
- use_cases/: casos de uso (inputs/outputs, sem IO direto)
- services/: serviços de aplicação (resolução de identidade)
- infra/: implementações concretas de IO (disco, HTTP, memória)
- protocols/: contratos/interfaces e modelos
- domain/: formas de identificador do protocolo
- observability/: correlation_id dos logs estruturados

Padrão: app executa; api adapta; config configura; utils apoia.
"""
