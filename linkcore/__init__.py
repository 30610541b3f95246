from linkcore.store import ShortenerStore, StoreState
from linkcore.sequence import SequenceAllocator
from linkcore.utils.codec import CodeCodec


__all__ = [
    'ShortenerStore',
    'StoreState',
    'SequenceAllocator',
    'CodeCodec',
]
