"""
Custom Data Structures for the Bookmark Index
Built ENTIRELY from scratch - no external libraries used for core logic.

This module contains hand-built implementations of:
1. HashIndex  - Open-addressed hash table (URL -> bookmark) for O(1) lookups
2. TitleTrie  - Prefix tree over bookmark titles for autocomplete
3. RecentList - Bounded singly linked list of recently visited bookmarks
4. MinHeap    - Binary min-heap keyed by visit count (least visited first)

Author: Bookmark Index Team
Purpose: Keep bookmarks in memory using fundamental data structures
"""


# ============================================================================
# 1. HASH INDEX - Hash Table with Linear Probing
# ============================================================================

class _HashEntry:
    """Occupied slot of the HashIndex: one key-value pair."""
    def __init__(self, key, value):
        self.key = key
        self.value = value


# Marks a slot whose entry was deleted. Lookups probe past it, inserts may reuse it.
_TOMBSTONE = object()


class HashIndex:
    """
    Hash Table implementation using open addressing (linear probing).

    How it works:
    - A flat array of slots; each slot is empty, a tombstone, or an entry
    - The hash is a rolling string hash (h * 31 + char code) wrapped to 32 bits
    - Collisions probe the next slot, wrapping around the end of the array
    - Deleted slots become tombstones so later probe chains are not cut short
    - When entries + tombstones reach 75% the table is rebuilt: doubled
      (minimum 100 slots), or kept at its size when mostly tombstones

    Time Complexity:
    - Average case: O(1) for put, get, delete, contains
    - Worst case:   O(n) when every key lands on the same probe chain

    Space Complexity: O(n)
    """

    INITIAL_CAPACITY = 50
    MIN_RESIZE_CAPACITY = 100
    LOAD_FACTOR_THRESHOLD = 0.75

    def __init__(self, capacity=None):
        """Initialize an empty HashIndex."""
        self._capacity = capacity or self.INITIAL_CAPACITY
        self._slots = [None] * self._capacity
        self._size = 0
        self._tombstones = 0

    def _hash(self, key):
        """Compute the home slot for a string key."""
        h = 0
        for char in key:
            h = (h * 31 + ord(char)) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
        return abs(h) % self._capacity

    def _find_slot(self, key):
        """Return the slot index holding key, or -1 if absent."""
        start = self._hash(key)
        for i in range(self._capacity):
            index = (start + i) % self._capacity
            slot = self._slots[index]
            if slot is None:
                return -1
            if slot is not _TOMBSTONE and slot.key == key:
                return index
        return -1

    def _resize(self):
        """
        Rehash every live entry into a fresh table. Tombstones are dropped.

        The table doubles (minimum 100 slots) unless live entries fill less
        than half the threshold, in which case tombstones caused the trigger
        and the table is rebuilt at its current size.
        """
        old_slots = self._slots
        if self._size * 2 >= self._capacity * self.LOAD_FACTOR_THRESHOLD:
            self._capacity = max(self._capacity * 2, self.MIN_RESIZE_CAPACITY)
        self._slots = [None] * self._capacity
        self._size = 0
        self._tombstones = 0
        for slot in old_slots:
            if slot is not None and slot is not _TOMBSTONE:
                self.put(slot.key, slot.value)

    def put(self, key, value):
        """Insert or overwrite a key-value pair."""
        index = self._find_slot(key)
        if index != -1:
            self._slots[index].value = value
            return

        if self._size + self._tombstones >= self._capacity * self.LOAD_FACTOR_THRESHOLD:
            self._resize()

        start = self._hash(key)
        for i in range(self._capacity):
            index = (start + i) % self._capacity
            slot = self._slots[index]
            if slot is None or slot is _TOMBSTONE:
                if slot is _TOMBSTONE:
                    self._tombstones -= 1
                self._slots[index] = _HashEntry(key, value)
                self._size += 1
                return
        # Unreachable while the load factor stays below 1
        raise RuntimeError("HashIndex is full")

    def get(self, key, default=None):
        """Retrieve value by key, returning default if not found."""
        index = self._find_slot(key)
        if index == -1:
            return default
        return self._slots[index].value

    def delete(self, key):
        """Remove key. Returns True if something was removed."""
        index = self._find_slot(key)
        if index == -1:
            return False
        self._slots[index] = _TOMBSTONE
        self._size -= 1
        self._tombstones += 1
        return True

    def contains(self, key):
        return self._find_slot(key) != -1

    def count(self):
        """Number of live entries (not the array length)."""
        return self._size

    def capacity(self):
        return self._capacity

    def _entries(self):
        for slot in self._slots:
            if slot is not None and slot is not _TOMBSTONE:
                yield slot

    def keys(self):
        """Return a list of all keys."""
        return [entry.key for entry in self._entries()]

    def values(self):
        """Return a list of all values."""
        return [entry.value for entry in self._entries()]

    def items(self):
        """Return a list of (key, value) tuples."""
        return [(entry.key, entry.value) for entry in self._entries()]

    def clear(self):
        """Remove all entries and reset to initial state."""
        self._capacity = self.INITIAL_CAPACITY
        self._slots = [None] * self._capacity
        self._size = 0
        self._tombstones = 0

    def __setitem__(self, key, value):
        self.put(key, value)

    def __getitem__(self, key):
        index = self._find_slot(key)
        if index == -1:
            raise KeyError(key)
        return self._slots[index].value

    def __delitem__(self, key):
        if not self.delete(key):
            raise KeyError(key)

    def __contains__(self, key):
        return self.contains(key)

    def __len__(self):
        return self._size

    def __repr__(self):
        return f'HashIndex(count={self._size}, capacity={self._capacity})'


# ============================================================================
# 2. TITLE TRIE - Prefix Tree for Autocomplete
# ============================================================================

class _TrieNode:
    """
    Internal node for the TitleTrie.
    Each node represents a character and contains:
    - children: dict of child nodes (char -> _TrieNode)
    - urls: URLs of the bookmarks whose title ends here (empty = not terminal)
    """
    def __init__(self):
        self.children = {}
        self.urls = []

    @property
    def is_end(self):
        return bool(self.urls)


class TitleTrie:
    """
    Trie (Prefix Tree) over lower-cased bookmark titles.

    How it works:
    - Each node represents a single character of a lower-cased title
    - A terminal node keeps the URLs of every bookmark with that title,
      so two bookmarks sharing a title are both searchable
    - Prefix search walks to the prefix node, then collects every terminal
      below it depth-first (children in sorted order)
    - Deletion unwinds from the leaf, pruning nodes left with no children
      and no owners

    Time Complexity:
    - insert / search / delete: O(L) where L is title length
    - search_by_prefix:         O(P + K) where K is the number of matches
    """

    def __init__(self):
        """Initialize an empty Trie with a root node."""
        self.root = _TrieNode()
        self._word_count = 0

    def _find_node(self, text):
        node = self.root
        for char in text.lower():
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def insert(self, title, url):
        """Insert a title, recording url as one of its owners."""
        node = self.root
        for char in title.lower():
            if char not in node.children:
                node.children[char] = _TrieNode()
            node = node.children[char]

        if not node.is_end:
            self._word_count += 1
        if url not in node.urls:
            node.urls.append(url)

    def search(self, title):
        """Check if an exact title exists in the Trie. Returns True/False."""
        node = self._find_node(title)
        return node is not None and node.is_end

    def starts_with(self, prefix):
        """Check if any title in the Trie starts with the given prefix."""
        return self._find_node(prefix) is not None

    def _collect(self, node, current_word, results):
        """DFS to collect all terminals below a given node."""
        for url in node.urls:
            results.append({'word': current_word, 'url': url})
        for char in sorted(node.children):
            self._collect(node.children[char], current_word + char, results)

    def search_by_prefix(self, prefix):
        """
        Find all titles starting with prefix (case-insensitive).

        Returns:
            list: {'word': lower-cased title, 'url': owner} dicts
        """
        prefix = prefix.lower()
        node = self._find_node(prefix)
        if node is None:
            return []
        results = []
        self._collect(node, prefix, results)
        return results

    def delete(self, title, url=None):
        """
        Remove a title from the Trie.

        With url, only that owner is removed and the title stays searchable
        while other bookmarks still share it. Without url, every owner goes.

        Returns:
            bool: True if an owner was removed
        """
        removed, _ = self._delete(self.root, title.lower(), 0, url)
        return removed

    def _delete(self, node, word, index, url):
        """Returns (removed, prune_this_node)."""
        if index == len(word):
            if not node.is_end:
                return False, False
            if url is None:
                node.urls = []
            elif url in node.urls:
                node.urls.remove(url)
            else:
                return False, False
            if not node.is_end:
                self._word_count -= 1
            return True, not node.children and not node.is_end

        child = node.children.get(word[index])
        if child is None:
            return False, False

        removed, prune_child = self._delete(child, word, index + 1, url)
        if prune_child:
            del node.children[word[index]]
            return removed, not node.children and not node.is_end
        return removed, False

    def get_all_words(self):
        """Return every stored {'word', 'url'} pair."""
        results = []
        self._collect(self.root, '', results)
        return results

    def word_count(self):
        """Number of distinct lower-cased titles."""
        return self._word_count

    def __len__(self):
        return self._word_count

    def __repr__(self):
        return f'TitleTrie(words={self._word_count})'


# ============================================================================
# 3. RECENT LIST - Bounded Singly Linked List
# ============================================================================

class _ListNode:
    """Internal node for the RecentList."""
    def __init__(self, value):
        self.value = value
        self.next = None


class RecentList:
    """
    Recently visited bookmarks, newest first, built on a singly linked list.

    How it works:
    - 'head' is the most recent visit, 'tail' the oldest
    - New visits are pushed at the head; past max_size the tail is evicted
    - A repeat visit splices the node out and pushes it back at the head
    - Items are matched by their 'url' attribute

    Time Complexity:
    - insert_at_beginning: O(1), plus O(n) when an eviction walks to the tail
    - move_to_front, delete, contains: O(n)
    """

    DEFAULT_MAX_SIZE = 20

    def __init__(self, max_size=DEFAULT_MAX_SIZE):
        """Initialize an empty RecentList."""
        self._head = None
        self._tail = None
        self._size = 0
        self.max_size = max_size

    def insert_at_beginning(self, value):
        """Push value at the front, evicting the oldest entry past max_size."""
        node = _ListNode(value)
        if self._head is None:
            self._head = node
            self._tail = node
        else:
            node.next = self._head
            self._head = node
        self._size += 1

        if self._size > self.max_size:
            self.remove_from_end()

    def move_to_front(self, url):
        """
        Move an existing entry to the front.

        Returns:
            bool: False if url is not in the list (caller should insert)
        """
        prev = None
        node = self._head
        while node is not None:
            if node.value.url == url:
                if prev is None:
                    # Already at the front
                    return True
                prev.next = node.next
                if node is self._tail:
                    self._tail = prev
                node.next = self._head
                self._head = node
                return True
            prev = node
            node = node.next
        return False

    def remove_from_end(self):
        """Remove and return the oldest value, or None if empty."""
        if self._head is None:
            return None

        value = self._tail.value
        if self._head is self._tail:
            self._head = None
            self._tail = None
        else:
            node = self._head
            while node.next is not self._tail:
                node = node.next
            node.next = None
            self._tail = node
        self._size -= 1
        return value

    def contains(self, url):
        node = self._head
        while node is not None:
            if node.value.url == url:
                return True
            node = node.next
        return False

    def delete(self, url):
        """Remove the entry for url wherever it is. Returns True if removed."""
        prev = None
        node = self._head
        while node is not None:
            if node.value.url == url:
                if prev is None:
                    self._head = node.next
                else:
                    prev.next = node.next
                if node is self._tail:
                    self._tail = prev
                self._size -= 1
                return True
            prev = node
            node = node.next
        return False

    def get_all(self):
        """Return values from most recent to oldest."""
        result = []
        node = self._head
        while node is not None:
            result.append(node.value)
            node = node.next
        return result

    def get_size(self):
        return self._size

    def get_max_size(self):
        return self.max_size

    def clear(self):
        self._head = None
        self._tail = None
        self._size = 0

    def __contains__(self, url):
        return self.contains(url)

    def __len__(self):
        return self._size

    def __repr__(self):
        return f'RecentList(size={self._size}, max_size={self.max_size})'


# ============================================================================
# 4. MIN HEAP - Binary Min-Heap keyed by visit count
# ============================================================================

class MinHeap:
    """
    Binary Min-Heap built from scratch using a flat array.

    How it works:
    - Stored as a flat array where for element at index i:
      - Parent is at (i-1) // 2
      - Left child is at 2i + 1
      - Right child is at 2i + 2
    - Each slot is a (priority, order, item) tuple; priority is the item's
      visit_count, order breaks ties so older items come out first
    - Min-heap property: parent priority <= both children
    - Items are located by their 'url' attribute for updates and deletes

    Time Complexity:
    - insert, extract_min:  O(log n)
    - update_key, delete:   O(n) (linear scan to find the url)
    - get_least_visited(k): O(n + k log n) on a scratch copy
    """

    def __init__(self):
        """Initialize an empty MinHeap."""
        self._heap = []
        self._counter = 0

    def _swap(self, i, j):
        """Swap two elements in the heap array."""
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    def _less(self, i, j):
        return self._heap[i][:2] < self._heap[j][:2]

    def _heapify_up(self, index):
        """Bubble element UP to restore heap property."""
        while index > 0:
            parent = (index - 1) // 2
            if self._less(index, parent):
                self._swap(index, parent)
                index = parent
            else:
                break

    def _heapify_down(self, index):
        """Bubble element DOWN to restore heap property."""
        size = len(self._heap)
        while True:
            smallest = index
            left = 2 * index + 1
            right = 2 * index + 2
            if left < size and self._less(left, smallest):
                smallest = left
            if right < size and self._less(right, smallest):
                smallest = right
            if smallest == index:
                break
            self._swap(index, smallest)
            index = smallest

    def _index_of(self, url):
        for i, (_, _, item) in enumerate(self._heap):
            if item.url == url:
                return i
        return -1

    def insert(self, item):
        """Insert an item keyed by its visit_count."""
        self._heap.append((item.visit_count, self._counter, item))
        self._counter += 1
        self._heapify_up(len(self._heap) - 1)

    def extract_min(self):
        """Remove and return the least visited item."""
        if not self._heap:
            raise IndexError("extract_min from an empty heap")
        self._swap(0, len(self._heap) - 1)
        _, _, item = self._heap.pop()
        if self._heap:
            self._heapify_down(0)
        return item

    def peek(self):
        """Return the least visited item without removing it."""
        if not self._heap:
            raise IndexError("peek from an empty heap")
        return self._heap[0][2]

    def update_key(self, url, new_count):
        """
        Change the priority of the item with the given url and re-heapify.

        Returns:
            bool: False if url is not in the heap
        """
        index = self._index_of(url)
        if index == -1:
            return False

        old_count, order, item = self._heap[index]
        self._heap[index] = (new_count, order, item)
        if new_count < old_count:
            self._heapify_up(index)
        elif new_count > old_count:
            self._heapify_down(index)
        return True

    def delete(self, url):
        """Remove the item with the given url. Returns True if removed."""
        index = self._index_of(url)
        if index == -1:
            return False

        last = len(self._heap) - 1
        if index != last:
            self._swap(index, last)
        self._heap.pop()
        if index < len(self._heap):
            # Only one direction can apply; checking both is safe
            self._heapify_up(index)
            self._heapify_down(index)
        return True

    def _drain(self, limit):
        """Extract up to limit items, then restore the original array."""
        saved = list(self._heap)
        result = []
        try:
            while self._heap and len(result) < limit:
                result.append(self.extract_min())
        finally:
            self._heap = saved
        return result

    def get_least_visited(self, k=5):
        """Return the k least visited items, ascending, leaving the heap intact."""
        if k <= 0:
            return []
        return self._drain(k)

    def get_all_sorted(self):
        """Return every item in ascending visit order."""
        return self._drain(len(self._heap))

    def get_all(self):
        """Return items in heap-array order (unsorted)."""
        return [item for _, _, item in self._heap]

    def priorities(self):
        """Return (url, priority) pairs in heap-array order."""
        return [(item.url, priority) for priority, _, item in self._heap]

    def contains(self, url):
        return self._index_of(url) != -1

    def size(self):
        return len(self._heap)

    def is_empty(self):
        return len(self._heap) == 0

    def clear(self):
        self._heap = []

    def __len__(self):
        return len(self._heap)

    def __repr__(self):
        return f'MinHeap(size={len(self._heap)})'
