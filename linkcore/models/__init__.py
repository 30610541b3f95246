from linkcore.models.url_record_model import URLRecord, id_to_key, key_to_id


__all__ = [
    'URLRecord',
    'id_to_key',
    'key_to_id',
]
