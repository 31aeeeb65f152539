import pytest


@pytest.fixture
def nested_source():
    return """
      aa = {
          seq = {1, { 2, 'two' } ,3},
          nestedAA = { foo = 'bar', baz = { oneMore = 'enough' } }
      }

      list = {
                nil,
                { 'a', 'b', -11.1, },
                { x = '0', y = 0, z = { 0 }, },
                false,
             }
    """
