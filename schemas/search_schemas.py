from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing import Literal, Optional, Union

from config import Config

SuggestionType = Literal['verse', 'reference', 'popular']
SuggestionKind = Literal['all', 'verse', 'reference']


class ParsedReference(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    book: str = ''
    chapter: Optional[int] = None
    verse: Optional[int] = None
    end_verse: Optional[int] = Field(None, alias='endVerse')
    is_valid: bool = Field(False, alias='isValid')
    original_input: str = Field('', alias='originalInput')

    @model_validator(mode='after')
    def check_consistency(self):
        if self.end_verse is not None and self.verse is None:
            raise ValueError("endVerse requires verse")
        if not self.is_valid and self.book:
            raise ValueError("an invalid reference cannot name a book")
        return self

    def to_json(self):
        return self.model_dump(by_alias=True, exclude_none=True)


class Suggestion(BaseModel):
    text: str
    type: SuggestionType
    popularity: Optional[Union[int, float]] = None

    def to_json(self):
        return self.model_dump(exclude_none=True)


class Verse(BaseModel):
    id: Optional[Union[int, str]] = None
    book: str
    chapter: int
    verse: int
    text: str
    translation: str

    @classmethod
    def from_row(cls, row):
        """Build a verse from a bible_verses row (older rows use book_name)"""
        return cls(
            id=row.get('id'),
            book=row.get('book') or row.get('book_name'),
            chapter=row['chapter'],
            verse=row['verse'],
            text=row['text'],
            translation=row.get('translation') or 'KJV'
        )

    def to_json(self):
        return self.model_dump()


# Request schemas. GET query strings and POST bodies validate through the
# same models; POST bodies may use the longer field names.

class ReferenceSearchRequest(BaseModel):
    ref: str = Field(..., min_length=1, max_length=Config.MAX_REFERENCE_LENGTH, validation_alias=AliasChoices('ref', 'reference'))
    translation: Optional[str] = Field(None, validation_alias=AliasChoices('translation', 'version'))


class SuggestionRequest(BaseModel):
    q: str = Field('', max_length=Config.MAX_QUERY_LENGTH, validation_alias=AliasChoices('q', 'query'))
    type: SuggestionKind = 'all'
    limit: int = Field(Config.DEFAULT_SUGGESTION_LIMIT, ge=1)


class VerseSearchRequest(BaseModel):
    q: str = Field(..., min_length=1, max_length=Config.MAX_QUERY_LENGTH, validation_alias=AliasChoices('q', 'query'))
    book: Optional[str] = None
    translation: Optional[str] = Field(None, validation_alias=AliasChoices('translation', 'version'))
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=Config.MAX_PAGE_SIZE)


class SearchRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    q: str = Field(..., min_length=1, max_length=Config.MAX_QUERY_LENGTH, validation_alias=AliasChoices('q', 'query'))
    translation: Optional[str] = Field(None, validation_alias=AliasChoices('translation', 'version'))


def validation_message(error: ValidationError) -> str:
    """First validation problem as a short 'field: message' string"""
    details = error.errors()
    if not details:
        return "Invalid request"
    first = details[0]
    field = '.'.join(str(part) for part in first.get('loc', ())) or 'request'
    return f"{field}: {first.get('msg', 'invalid value')}"
