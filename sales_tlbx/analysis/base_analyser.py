"""Base analyzer class for all analysis components in the toolbox."""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyser(ABC):
    """Abstract base class for data analysis components.

    All analyzers must:
    1. Accept their input (a DatasetView or a SalesDataset) in the constructor
    2. Implement fit() to perform the analysis and return self for chaining
    3. Implement result() to return a frozen dataclass with results

    Analyzers are pure computations: they never mutate their input, and calling
    ``fit()`` again on the same input yields identical results.

    ### Adding a New Analyzer

    **1. Create analyzer class** (in `analysis/my_analyzer.py`):

    ```python
    from dataclasses import dataclass
    from sales_tlbx.data.views import DatasetView

    @dataclass(frozen=True)
    class MyAnalysisResult:
        '''Results package for MyAnalyzer.'''
        summary: pd.DataFrame

    class MyAnalyzer(BaseAnalyser):
        def __init__(self, view: DatasetView):
            self._view = view
            self._summary: pd.DataFrame | None = None

        def fit(self) -> "MyAnalyzer":
            self._summary = ...
            return self

        def result(self) -> MyAnalysisResult:
            if self._summary is None:
                raise ValueError("Call fit() first")
            return MyAnalysisResult(summary=self._summary)
    ```

    **2. Add factory method** to `SalesDataset`:

    ```python
    def make_my_analyzer(self, *, columns: Iterable[str] | None = None) -> MyAnalyzer:
        from sales_tlbx.analysis.my_analyzer import MyAnalyzer
        return MyAnalyzer(self.view(columns=columns))
    ```
    """

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Fit the analyzer to the data.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return analysis results as a frozen dataclass instance.

        Returns:
            A frozen @dataclass containing all analysis results.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...
