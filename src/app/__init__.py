"""App: coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: fluxos end-to-end (interação → acknowledgement → follow-up)
- domain/: modelos imutáveis (interação, respostas, encaminhamento)
- use_cases/: comandos de aplicação (sem IO direto)
- services/: serviços de aplicação (follow-ups, encaminhamento)
- infra/: implementações concretas (crypto, rate limit)
- protocols/: contratos/interfaces
- observability/: correlation id e métricas em log

Padrão: app executa; api adapta; fsm governa; routing classifica; utils apoia.
"""
