# redline

Building blocks for describing and analysing the differences between two
versions of a text. The package provides diff result types and statistics,
analyzer interfaces and reports, selectors that pick out parts of a diff,
plain text measures, and small learned models that judge how much an edit
changed.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

The package has no dependencies outside the standard library.

## Modules

- `redline.diff`: `DiffResult`, `DiffOperation`, `EditType`,
  `ChangeCategory`, `MixedCategory`, `CharSpan`, `DiffStatistics` and
  `DiffAnalysis`. There are also `UnifiedDiff` and `DiffHunk`, which render
  hunks as unified-diff text. `DiffResult.add_operation` updates the
  insertion, deletion and modification counts. `finalize` computes the change
  percentage and the edit distance. `summary`, `is_empty`,
  `changed_operations` and `operations_by_category` report on the result.
- `redline.config`: `DiffAlgorithm` (`MYERS`, `PATIENCE`, `HISTOGRAM`,
  `LCS`) and the frozen `DiffConfig`. `DiffConfig.minimal()` and
  `DiffConfig.comprehensive()` are presets. Each `with_*` and `add_*` method
  returns a new configuration.
- `redline.analysis`: `AnalysisResult`, which holds metrics, insights,
  metadata and a confidence. `AnalysisReport` collects results. Its
  `compute_summary` averages each metric across the results that report it.
  `SingleDiffAnalyzer` and `MultiDiffAnalyzer` are the abstract base classes
  for analyzers.
- `redline.selectors`: `WholeDocumentSelector`, `ParagraphSelector`,
  `SectionSelector`, `EditTypeSelector` and `PositionRangeSelector`.
  - `ParagraphSelector` treats paragraphs as blocks separated by blank lines.
  - `SectionSelector` treats a line as a header if it starts with `#`, or if
    it has at least two words and no lowercase letters.
  - `CompositeSelector.all_of` and `CompositeSelector.any_of` combine
    selectors.
- `redline.textstats`: `levenshtein_distance`, `char_similarity`,
  `word_overlap` (Jaccard similarity of lowercased word sets), `length_ratio`,
  `count_words`, `count_syllables`, `flesch_reading_ease`, `stopword_ratio`,
  `whitespace_ratio` and `contains_negation`.
- `redline.bert_training`: `BertSemanticTrainer` collects similarity scores
  and learns a threshold. It blends three methods: a percentile, a
  two-component split (used from 50 samples) and an elbow point (used from 30
  samples). `train()` raises `TrainingError` when there are fewer than ten
  samples. It returns `LearnedParameters`, which can be saved with `to_json`
  and loaded with `from_json`.
- `redline.bert_semantic`: `BertSemanticAnalyzer` uses `LearnedParameters`
  and an `InferenceConfig`. It computes a confidence score and detects drift
  and outliers, returned together as `SimilarityMetrics`. Its `analyze`
  method returns an `AnalysisResult` for a `DiffResult`.
  `ThresholdLearningStats.summary` formats the learning statistics as one
  line.
- `redline.features`: `StandardFeatureExtractor` turns a `DiffOperation` into
  a `FeatureVector` of sixteen named features.
- `redline.naive_bayes`: `NaiveBayesClassifier` is a Gaussian naive Bayes
  model trained on `TrainingSample`s. `create_training_samples` builds samples
  from labelled operations. `classify_operation` returns a `Classification`.

## Example

```python
from redline.diff import CharSpan, DiffOperation, DiffResult, EditType

result = DiffResult("hello", "world")
result.add_operation(
    DiffOperation(EditType.MODIFY)
    .with_original("hello", CharSpan(0, 5))
    .with_modified("world", CharSpan(0, 5))
)
result.finalize()
print(result.summary())
print(result)
```

Learn a threshold and score a similarity value:

```python
from redline.bert_training import BertSemanticTrainer
from redline.bert_semantic import BertSemanticAnalyzer

trainer = BertSemanticTrainer()
trainer.add_samples([0.3] * 20 + [0.8] * 20)
params = trainer.train()

analyzer = BertSemanticAnalyzer(params)
print(analyzer.get_similarity_metrics(0.4))
```

Train and use the classifier:

```python
from redline.diff import CharSpan, ChangeCategory, DiffOperation, EditType
from redline.features import StandardFeatureExtractor
from redline.naive_bayes import NaiveBayesClassifier, create_training_samples

extractor = StandardFeatureExtractor()
op = (
    DiffOperation(EditType.MODIFY)
    .with_original("Hello", CharSpan(0, 5))
    .with_modified("hello", CharSpan(0, 5))
)
classifier = NaiveBayesClassifier()
classifier.train(create_training_samples([(op, ChangeCategory.FORMATTING)], extractor))
print(classifier.classify_operation(op))
```

## What this package does not do

- It has no diff engine. Nothing here computes operations from two texts,
  runs a diff algorithm, tokenizes text or normalizes it. You build each
  `DiffResult` yourself by adding `DiffOperation`s to it.
- `DiffConfig` only stores settings. Nothing in the package acts on them. Its
  `pipeline` and `tokenizer` fields accept any object.
- `BertSemanticAnalyzer` does not load an embedding model. It measures
  similarity as the word-level Jaccard overlap of the two texts.
- There is no command-line interface.