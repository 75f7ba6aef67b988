import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from domain.exceptions.currency import ArgumentOutOfRangeError

T = TypeVar('T')


@dataclass(frozen=True)
class PageRequest:
	page_number: int
	page_size: int

	@classmethod
	def create(cls, page_number: int, page_size: int) -> 'PageRequest':
		if page_number <= 0:
			raise ArgumentOutOfRangeError('page_number')
		if page_size <= 0:
			raise ArgumentOutOfRangeError('page_size')
		return cls(page_number=page_number, page_size=page_size)

	def skip(self) -> int:
		return (self.page_number - 1) * self.page_size


@dataclass(frozen=True)
class PagedResult(Generic[T]):
	items: Sequence[T]
	page_number: int
	page_size: int
	total_items: int

	@property
	def total_pages(self) -> int:
		if self.total_items == 0:
			return 0
		return math.ceil(self.total_items / self.page_size)
