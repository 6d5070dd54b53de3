# vamanatools

Utilities for graph-based approximate nearest neighbour indices that are
stored in flat binary files. The package provides distance functions,
recall scoring, sequential cached binary I/O and merging of shard graphs.

## Installation

```
pip install vamanatools
```

To run the tests, install the `test` extra (`pip install vamanatools[test]`)
and run `pytest`.

## Modules

### `vamanatools.distance`

- `compute_l2_norm(vector)` returns the Euclidean norm, computed in single
  precision.
- `compute_cosine_similarity(left, right)` returns the cosine of the angle
  between two vectors of the same length. A zero vector gives NaN.
- `compute_cosine_similarity_batch(query, indices, all_data)` returns a
  float32 array with the similarity of the query to each selected row of
  `all_data`. `all_data` may be 2-D, or flat with a size that is a multiple of
  the query length.
- Distance classes: the abstract base `Distance`, plus `DistanceCosine`,
  `DistanceL2`, `DistanceL2Int8`, `DistanceL2UInt8`, `SlowDistanceL2Int` and
  `SlowDistanceL2Float`. Each has `compare(a, b, length=None)`, which works
  on the first `length` entries. Every class except `DistanceCosine` returns
  the *squared* L2 distance. The int8 and uint8 classes first convert their
  inputs to that type. A `length` larger than a vector raises `ValueError`.

```python
import numpy as np
from vamanatools.distance import DistanceL2

a = np.array([1.0, 2.0], dtype=np.float32)
b = np.array([4.0, 6.0], dtype=np.float32)
print(DistanceL2().compare(a, b, 2))  # 25.0
```

### `vamanatools.recall`

- `calculate_recall(gold_std, gs_dist, our_results, recall_at)` returns the
  mean recall@`recall_at` in percent. `gold_std` and `our_results` are 2-D
  arrays with one row of ids per query. If `gs_dist` (ground-truth distances)
  is given, ground-truth ids whose distance ties with the `recall_at`-th one
  also count. It raises `ValueError` in these cases: the query counts differ,
  there are no queries, or `recall_at` is not positive or is larger than
  either width.
- `get_memory_budget(mem_budget_str)` reads a leading number of GiB from the
  string and returns a budget in bytes. If the budget minus 0.25 GiB is still
  above 1 GiB, 0.25 GiB is first set aside for cached nodes.
- `generate_random_warmup(warmup_num, warmup_dim, warmup_aligned_dim, dtype)`
  returns a `(warmup_num, warmup_aligned_dim)` array. Its first `warmup_dim`
  columns hold random integers in [-128, 127], converted to `dtype`; unsigned
  types wrap around. The remaining columns are zero.
- Constants: `TRAINING_SET_SIZE`, `SPACE_FOR_CACHED_NODES_IN_GB`,
  `THRESHOLD_FOR_CACHING_IN_GB`, `NUM_NODES_TO_CACHE`, `WARMUP_L`.

```python
import numpy as np
from vamanatools.recall import calculate_recall

gold = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint32)
found = np.array([[1, 9, 9], [7, 8, 9]], dtype=np.uint32)
print(calculate_recall(gold, None, found, 1))  # 50.0
```

### `vamanatools.cached_io`

- `CachedReader(filename, cache_size)` reads a file sequentially.
  `read(n_bytes)` returns `bytes`, served from the cache block where
  possible. Reading past the end of the file raises `ANNException`.
  `file_size()` returns the file's size in bytes.
- `CachedWriter(filename, cache_size)` buffers small writes. `write(data)`
  either adds the data to the cache or writes the cache and the data straight
  to the file. `flush_cache()` writes out the cache. `reset()` flushes and
  moves back to the start of the file. `file_size()` counts the bytes
  written so far.

Both classes are context managers, and `close()` flushes and closes the file.

### `vamanatools.merge`

- `read_idmap(fname)` reads a bin file of 1-dimensional uint32 ids. The file
  holds a count, the dimension 1, then the ids. The function returns a
  `numpy.uint32` array and raises `ANNException` if the header or the file
  size is wrong.
- `merge_shards(vamana_prefix, vamana_suffix, idmaps_prefix, idmaps_suffix,
  nshards, max_degree, output_vamana, medoids_file)` merges per-shard graph
  indices into one graph. Shard `i` reads
  `<vamana_prefix><i><vamana_suffix>` and
  `<idmaps_prefix><i><idmaps_suffix>`. Neighbour lists of a node that
  appears in several shards are mapped to global ids, deduplicated, shuffled
  and cut to `max_degree`. The medoid of each shard, mapped to its global id,
  goes to `medoids_file`. The function returns the merged index size in
  bytes. If a shard file's stored size does not match its real size, it
  raises `ANNException`.

From the command line:

```
vamana-merge-shards VAMANA_PREFIX VAMANA_SUFFIX IDMAPS_PREFIX IDMAPS_SUFFIX N_SHARDS MAX_DEGREE OUTPUT_INDEX OUTPUT_MEDOIDS
```

The same command is available as `python -m vamanatools.merge`, or from
Python:

```python
from vamanatools.merge import merge_shards

merge_shards("shard-", "_mem.index", "shard-", "_ids_uint32.bin",
             4, 64, "merged.index", "medoids.bin")
```

### Other modules

- `vamanatools.concurrent_queue.ConcurrentQueue(null_value=None)` is a
  thread-safe FIFO. It has `push`, `insert` (an iterable), `size`, `empty`
  and `pop`; `pop` returns `null_value` instead of blocking when the queue is
  empty. `wait_for_push_notify` and `wait_for_pop_notify` wait up to a given
  number of seconds, and the `*_notify_one` and `*_notify_all` methods wake
  those waiters.
- `vamanatools.timer.Timer` measures time since it was created or since
  `reset()`. `elapsed()` returns whole microseconds.
- `vamanatools.errors.ANNException` carries an error code and an optional
  function, file and line. `message()` formats all of them together.
  `NotImplementedException` is a `NotImplementedError` with a fixed message.

Progress messages go to the standard `logging` module, under the module
names.

## What the package does not do

The package does not build, load or search a graph index. It has no index
class, no graph construction, no product quantisation, no data partitioning
and no disk-layout writer. It works on index files that were made elsewhere:
it merges shard graphs, and it scores search results that are already
available.