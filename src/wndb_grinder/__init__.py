__version__ = "0.1.0"

from .exceptions import (
    WndbError as WndbError,
    CompatibilityViolation as CompatibilityViolation,
    MalformedInput as MalformedInput,
    ConfigError as ConfigError,
    DataImportError as DataImportError,
)

from .outcome import (
    Ok as Ok,
    Recoverable as Recoverable,
    Fatal as Fatal,
    Outcome as Outcome,
)

from .coder import (
    code_relation as code_relation,
    code_frame_id as code_frame_id,
    code_lexfile as code_lexfile,
)

from .flags import Flags as Flags

from .models import (
    LexicalUnit as LexicalUnit,
    Sense as Sense,
    Synset as Synset,
    VerbFrame as VerbFrame,
    VerbTemplate as VerbTemplate,
    Model as Model,
)

from .encoder import (
    EncodedRecord as EncodedRecord,
    RecordEncoder as RecordEncoder,
)

from .offsets import (
    OffsetTable as OffsetTable,
    resolve as resolve,
    read_offsets as read_offsets,
    write_offsets as write_offsets,
)

from .ordering import (
    LegacyOrder as LegacyOrder,
    SenseOrderer as SenseOrderer,
    group_by_lemma_and_pos as group_by_lemma_and_pos,
    group_by_sense_key as group_by_sense_key,
)

from .indexer import (
    IndexEntry as IndexEntry,
    WordIndexer as WordIndexer,
    SenseIndexer as SenseIndexer,
)

from .grinder import Grinder as Grinder

from .importer import (
    load_lmf as load_lmf,
    build_model as build_model,
)

from .config import (
    GrindConfig as GrindConfig,
    load_config as load_config,
)
