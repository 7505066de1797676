class Result:
    def __init__(self, target, action):
        self.target = target
        self.action = action
        self.status = 'pending'
        self.exception = None

    def __repr__(self):
        return f'Result({self.action}, {self.status})'


class Results(list):
    def new(self, target, action):
        result = Result(target, action)
        self.append(result)
        return result

    @property
    def failed(self):
        return any(result.status == 'failure' for result in self)
