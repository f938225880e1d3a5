# Dias oferecidos no formulário (segunda a sábado), na forma gravada no banco
DIAS_SEMANA = ["segunda", "terça", "quarta", "quinta", "sexta", "sábado"]

# Ordem de exibição; domingo entra só para ordenar dados antigos
ORDEM_DIAS = ["segunda", "terça", "quarta", "quinta", "sexta", "sábado", "domingo"]

ABREVIACAO_DIAS = {
    "segunda": "Seg",
    "terça": "Ter",
    "quarta": "Qua",
    "quinta": "Qui",
    "sexta": "Sex",
    "sábado": "Sáb",
    "domingo": "Dom",
}

NOME_DIAS = {
    "segunda": "Segunda",
    "terça": "Terça",
    "quarta": "Quarta",
    "quinta": "Quinta",
    "sexta": "Sexta",
    "sábado": "Sábado",
    "domingo": "Domingo",
}

MAPA_DIAS_SEMANA = {dia: i for i, dia in enumerate(ORDEM_DIAS)}

# Rótulos usados quando a referência não existe mais
SEM_ESPECIALIDADE = "Sem especialidade"
SEM_BAIRRO = "Sem bairro"

# Sentinelas dos filtros
TODOS = "Todos"
TODAS = "Todas"
