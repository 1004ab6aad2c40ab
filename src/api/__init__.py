"""API: camada de borda do Discord.

Responsabilidades:
- Receber interações assinadas (webhook)
- Validar assinaturas e autorização do proxy
- Decodificar payloads para modelos internos
- Construir payloads de resposta para a API externa

Subpastas:
- connectors/: webhook, transporte REST e cliente do proxy
- normalizers/: conversão de payloads externos → modelos internos
- payload_builders/: construção de respostas a interações
- validators/: autorização de chamadas ao proxy
- routes/: endpoints HTTP (interações, proxy, health)

NÃO PODE conter: FSM, regras de rate limit, orquestração de use cases.
"""
