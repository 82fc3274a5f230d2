import pytest

from _html5update.parser import parse_fragment
from html5update import DefaultStringOptions


@pytest.fixture(autouse=True)
def _reset_serializer():
    DefaultStringOptions.reset_defaults()


@pytest.fixture
def sample_page():
    return parse_fragment(
        """\
        <div class="section">
          <h2><a name="Usage"></a>Usage</h2>
          <p>Add the <a class="externalLink" href="https://maven.apache.org/">Maven</a>
             dependency <img src="images/icon_info_sml.gif" alt="info">:</p>
          <div class="source"><div class="source"><pre>&lt;dep/&gt;</pre></div></div>
          <table border="0" class="bodyTable">
            <tr class="a"><th>Name</th><th>Version</th></tr>
            <tr class="b"><td>core</td><td>1.0</td></tr>
            <tr class="a"><td>api</td><td>1.1</td></tr>
          </table>
          <p><a href="#usage.example">See the example</a>.</p>
        </div>
        """
    )
