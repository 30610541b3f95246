from linkcore.utils.config import app_env, app_name, app_prefix, load_config
from linkcore.utils.codec import CodeCodec, split_uint64, join_int64_parts
from linkcore.utils.logging import initialize_logging


__all__ = [
    'CodeCodec',
    'split_uint64',
    'join_int64_parts',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'initialize_logging',
]
