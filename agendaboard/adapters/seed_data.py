"""
Default catalog data loaded into an empty store.
"""

DEFAULT_PROFESSIONALS = [
    {"name": "Ana Silva", "color": "#00D9FF", "group_label": "principal"},
    {"name": "Bruno Costa", "color": "#7C3AED", "group_label": "principal"},
    {"name": "Carla Mendes", "color": "#0EA5E9", "group_label": "principal"},
    {"name": "Diego Rocha", "color": "#06B6D4", "group_label": "principal"},
    {"name": "Elena Ferreira", "color": "#A855F7", "group_label": "principal"},
    {"name": "Felipe Santos", "color": "#EC4899", "group_label": "principal"},
    {"name": "Gabriela Lima", "color": "#001F3F", "group_label": "principal"},
    {"name": "Henrique Oliveira", "color": "#0369A1", "group_label": "principal"},
    {"name": "Isabela Martins", "color": "#6366F1", "group_label": "principal"},
    {"name": "João Pereira", "color": "#14B8A6", "group_label": "principal"},
    {"name": "Karen Souza", "color": "#D946EF", "group_label": "principal"},
    {"name": "Lucas Alves", "color": "#0891B2", "group_label": "secundario"},
    {"name": "Mariana Nunes", "color": "#8B5CF6", "group_label": "secundario"},
]

DEFAULT_ACTIVITY_TYPES = [
    {"name": "Animação", "color": "#00D9FF"},
    {"name": "Edição", "color": "#7C3AED"},
    {"name": "Sonorização", "color": "#0EA5E9"},
    {"name": "Locução", "color": "#06B6D4"},
    {"name": "Tratamento de Imagens", "color": "#A855F7"},
    {"name": "Design", "color": "#EC4899"},
    {"name": "Reunião", "color": "#001F3F"},
    {"name": "Backup", "color": "#0369A1"},
    {"name": "Pesquisa", "color": "#6366F1"},
    {"name": "Presencial", "color": "#14B8A6"},
    {"name": "Almoço", "color": "#D946EF"},
]

DEFAULT_REQUESTERS = ["Bruno", "Anna", "Gabi", "Lucas", "Mirian", "Allan", "Phill"]


def seed_store(store) -> bool:
    """
    Load the default catalog into an empty store.

    Returns:
        True if data was written, False if the store already had a catalog
    """
    if not store.is_empty():
        return False

    for column_order, professional in enumerate(DEFAULT_PROFESSIONALS, 1):
        store.add_professional({**professional, "column_order": column_order})

    for activity_type in DEFAULT_ACTIVITY_TYPES:
        store.add_activity_type(activity_type["name"], activity_type["color"])

    for name in DEFAULT_REQUESTERS:
        store.add_requester(name)

    return True
